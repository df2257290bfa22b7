# backend/consultation_portal/models/user.py
"""
User model for the consultation portal.

This module defines the User model which represents both students and
faculty members. The role column decides which fields are meaningful:
students carry their department and batch, faculty accounts point at
their FacultyProfile once registration has completed.

Classes:
    User: Account model for authentication and role management
"""

import logging
from typing import Any

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.enums import RoleName
from ..database import Base

logger = logging.getLogger(__name__)


class User(Base):
    """
    Account used for authentication and as the owner of bookings/profiles.

    Attributes:
        id: Primary key (ULID)
        email: Unique, lowercased email address used for login
        hashed_password: Bcrypt hashed password
        name: Display name
        role: 'student' or 'faculty'
        student_department: Department (students only)
        batch_no: Batch/year (students only)
        faculty_profile_id: Linked FacultyProfile (faculty only, set after creation)
        created_at: Account creation timestamp
        updated_at: Last update timestamp

    Note:
        A faculty account briefly exists without faculty_profile_id while its
        profile is being created during registration. If the profile cannot
        be created the account is deleted again.
    """

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default=RoleName.STUDENT.value)
    student_department = Column(String(100), nullable=True)
    batch_no = Column(String(50), nullable=True)
    # use_alter breaks the users <-> faculty_profiles FK cycle at DDL time
    faculty_profile_id = Column(
        String(26),
        ForeignKey("faculty_profiles.id", use_alter=True, name="fk_users_faculty_profile_id"),
        nullable=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    faculty_profile = relationship(
        "FacultyProfile",
        foreign_keys=[faculty_profile_id],
        uselist=False,
        post_update=True,
    )

    __table_args__ = (
        CheckConstraint("role IN ('student', 'faculty')", name="ck_users_role"),
    )

    def __init__(self, **kwargs: Any) -> None:
        """Initialize a new user."""
        super().__init__(**kwargs)
        role = kwargs.get("role")
        if role:
            logger.info(f"Creating new {role} user with email: {kwargs.get('email', 'unknown')}")

    def __repr__(self) -> str:
        """String representation of the User object."""
        return f"<User {self.email} ({self.role})>"

    @property
    def is_student(self) -> bool:
        return self.role == RoleName.STUDENT.value

    @property
    def is_faculty(self) -> bool:
        return self.role == RoleName.FACULTY.value
