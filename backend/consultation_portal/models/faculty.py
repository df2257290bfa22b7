# backend/consultation_portal/models/faculty.py
"""
Faculty Profile model for the consultation portal.

Each faculty account owns exactly one profile holding the public
directory information shown to students and the free-text description
of when the faculty member is available.
"""

import logging

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.constants import DEFAULT_AVAILABLE_SLOTS, PROFILE_DEFAULT_BIO, PROFILE_DEFAULT_TITLE
from ..database import Base

logger = logging.getLogger(__name__)


class FacultyProfile(Base):
    """
    Model representing a faculty member's public profile.

    Attributes:
        id: Primary key (the id students book against)
        user_id: Owning account (unique, one-to-one)
        department: Academic department
        title: Academic title
        bio: Short biography
        available_slots: Free-text description of consultation hours
    """

    __tablename__ = "faculty_profiles"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    user_id = Column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    department = Column(String(100), nullable=True)
    title = Column(String(100), nullable=False, default=PROFILE_DEFAULT_TITLE)
    bio = Column(String(500), nullable=False, default=PROFILE_DEFAULT_BIO)
    available_slots = Column(Text, nullable=False, default=DEFAULT_AVAILABLE_SLOTS)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", foreign_keys=[user_id])

    def __repr__(self) -> str:
        return f"<FacultyProfile {self.id}: user={self.user_id}, department={self.department}>"
