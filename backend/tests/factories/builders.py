# backend/tests/factories/builders.py
"""Builders for accounts, faculty profiles and bookings used across tests."""

from datetime import datetime
from typing import Dict, Optional, Tuple

from sqlalchemy.orm import Session

from consultation_portal.auth import get_password_hash, issue_credential
from consultation_portal.core.enums import RoleName
from consultation_portal.models import Booking, BookingStatus, FacultyProfile, User

TEST_PASSWORD = "secret123"

# bcrypt is slow; hash the shared test password once
_TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


def make_student(
    db: Session,
    email: str = "student@sru.edu.in",
    name: str = "Sam Student",
    student_department: str = "CSE",
    batch_no: str = "2022",
) -> User:
    student = User(
        email=email,
        hashed_password=_TEST_PASSWORD_HASH,
        name=name,
        role=RoleName.STUDENT.value,
        student_department=student_department,
        batch_no=batch_no,
    )
    db.add(student)
    db.commit()
    return student


def make_faculty(
    db: Session,
    email: str = "faculty@sru.edu.in",
    name: str = "Dr. Fay Faculty",
    department: str = "CSE",
    title: str = "Professor",
    bio: str = "Distributed systems.",
    available_slots: str = "Mon 10-12",
) -> Tuple[User, FacultyProfile]:
    user = User(
        email=email,
        hashed_password=_TEST_PASSWORD_HASH,
        name=name,
        role=RoleName.FACULTY.value,
    )
    db.add(user)
    db.flush()
    profile = FacultyProfile(
        user_id=user.id,
        department=department,
        title=title,
        bio=bio,
        available_slots=available_slots,
    )
    db.add(profile)
    db.flush()
    user.faculty_profile_id = profile.id
    db.commit()
    return user, profile


def make_booking(
    db: Session,
    student: User,
    profile: FacultyProfile,
    status: BookingStatus = BookingStatus.PENDING,
    topic: str = "Project review",
    requested_date_time: Optional[datetime] = None,
    final_date_time: Optional[datetime] = None,
    room_number: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Booking:
    booking = Booking(
        student_id=student.id,
        faculty_profile_id=profile.id,
        requested_date_time=requested_date_time or datetime(2030, 1, 15, 10, 0),
        duration_minutes=30,
        topic=topic,
        student_message="",
        status=status.value,
        final_date_time=final_date_time,
        room_number=room_number,
    )
    if created_at is not None:
        booking.created_at = created_at
    db.add(booking)
    db.commit()
    return booking


def bearer(user: User, role: Optional[str] = None) -> Dict[str, str]:
    """Authorization header carrying a fresh credential for user."""
    token = issue_credential(user.id, role or user.role)
    return {"Authorization": f"Bearer {token}"}

