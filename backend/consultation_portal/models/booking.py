# backend/consultation_portal/models/booking.py
"""
Booking model for the consultation portal.

A booking is a student's request for a consultation with one faculty
member. It starts as a pending request carrying the student's preferred
date/time, and the faculty member decides the final schedule (date/time
and room) when approving it.

Bookings are never deleted; cancellation is a terminal status.
"""

from datetime import datetime
from enum import Enum
import logging
from typing import Any, Optional

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..core.constants import DEFAULT_DURATION_MINUTES, MAX_STUDENT_MESSAGE_LENGTH, MAX_TOPIC_LENGTH
from ..database import Base

logger = logging.getLogger(__name__)


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "pending"  # Default - awaiting faculty decision
    APPROVED = "approved"  # Final schedule confirmed
    REJECTED = "rejected"
    COMPLETED = "completed"  # Reserved; no operation moves a booking here
    CANCELLED = "cancelled"  # Cancelled by the student
    RESCHEDULE = "reschedule"  # Faculty asked for a different slot


class Booking(Base):
    """
    Consultation request between a student and a faculty profile.

    Schedule fields (final_date_time, room_number) are written by the owning
    faculty member; approval requires both and every move to rejected or
    cancelled clears them.
    """

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))

    # Core relationships
    student_id = Column(String(26), ForeignKey("users.id"), nullable=False, index=True)
    faculty_profile_id = Column(
        String(26), ForeignKey("faculty_profiles.id"), nullable=False, index=True
    )

    # Student's request
    requested_date_time = Column(DateTime(timezone=True), nullable=False)
    student_message = Column(Text, nullable=False, default="")
    duration_minutes = Column(Integer, nullable=False, default=DEFAULT_DURATION_MINUTES)
    topic = Column(String(MAX_TOPIC_LENGTH), nullable=False)

    # Faculty's decision
    final_date_time = Column(DateTime(timezone=True), nullable=True)
    room_number = Column(String(50), nullable=True)

    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    student = relationship("User", foreign_keys=[student_id])
    faculty_profile = relationship("FacultyProfile", foreign_keys=[faculty_profile_id])

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'completed', 'cancelled', 'reschedule')",
            name="ck_bookings_status",
        ),
        CheckConstraint("duration_minutes > 0", name="check_duration_positive"),
        CheckConstraint(
            f"length(student_message) <= {MAX_STUDENT_MESSAGE_LENGTH}",
            name="check_student_message_length",
        ),
    )

    def __init__(self, **kwargs: Any) -> None:
        """Initialize as a pending request by default."""
        super().__init__(**kwargs)
        if not self.status:
            self.status = BookingStatus.PENDING.value
        if self.duration_minutes is None:
            self.duration_minutes = DEFAULT_DURATION_MINUTES
        if self.student_message is None:
            self.student_message = ""
        logger.info(
            f"Creating booking for student {self.student_id} with faculty {self.faculty_profile_id}"
        )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<Booking {self.id}: student={self.student_id}, "
            f"faculty={self.faculty_profile_id}, status={self.status}>"
        )

    @property
    def has_schedule(self) -> bool:
        return self.final_date_time is not None and self.room_number is not None

    def clear_schedule(self) -> None:
        """Drop the faculty-assigned date/time and room."""
        self.final_date_time = None
        self.room_number = None

    def apply_schedule(
        self, final_date_time: Optional[datetime] = None, room_number: Optional[str] = None
    ) -> None:
        """Write whichever schedule fields were supplied, keeping the others."""
        if final_date_time is not None:
            self.final_date_time = final_date_time
        if room_number is not None:
            self.room_number = room_number


Index("ix_booking_faculty_requested", Booking.faculty_profile_id, Booking.requested_date_time)
