# backend/consultation_portal/schemas/booking.py
"""
Booking schemas for the consultation portal.

Requests carry the student's preferred date/time (``dateTime``); the
faculty decision (``finalDateTime``/``roomNumber``) arrives through the
status update request. Responses embed the counterpart of the caller:
students see the faculty member, faculty see the student.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from ..core.constants import (
    DEFAULT_DURATION_MINUTES,
    MAX_ROOM_NUMBER_LENGTH,
    MAX_STUDENT_MESSAGE_LENGTH,
    MAX_TOPIC_LENGTH,
)
from ..models.booking import Booking
from ._strict_base import StrictModel, StrictRequestModel


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class BookingCreate(StrictRequestModel):
    """Student's consultation request."""

    faculty_id: str = Field(..., min_length=1, description="Faculty profile to book")
    date_time: datetime = Field(..., description="Preferred date/time")
    duration_minutes: int = Field(default=DEFAULT_DURATION_MINUTES, gt=0, le=480)
    topic: str = Field(..., min_length=1, max_length=MAX_TOPIC_LENGTH)
    student_message: str = Field(default="", max_length=MAX_STUDENT_MESSAGE_LENGTH)

    @field_validator("topic", "student_message", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("student_message", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class BookingStatusUpdate(StrictRequestModel):
    """
    Faculty decision on a booking.

    ``status`` is validated by the lifecycle engine so an unknown value
    produces the same invalid-status error as a disallowed one.
    """

    status: str
    final_date_time: Optional[datetime] = None
    room_number: Optional[str] = Field(default=None, max_length=MAX_ROOM_NUMBER_LENGTH)

    @field_validator("room_number", mode="before")
    @classmethod
    def _blank_room_is_missing(cls, value: Any) -> Any:
        value = _strip(value)
        return value or None

    @field_validator("final_date_time", mode="before")
    @classmethod
    def _blank_date_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BookingStudentSummary(StrictModel):
    id: str
    name: str
    email: str
    student_department: Optional[str] = None
    batch_no: Optional[str] = None


class BookingFacultySummary(StrictModel):
    id: str
    name: str
    email: str


class BookingResponse(StrictModel):
    id: str
    student_id: str
    faculty_id: str
    requested_date_time: datetime
    duration_minutes: int
    topic: str
    student_message: str = ""
    final_date_time: Optional[datetime] = None
    room_number: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    student: Optional[BookingStudentSummary] = None
    faculty: Optional[BookingFacultySummary] = None

    @classmethod
    def from_booking(
        cls,
        booking: Booking,
        *,
        include_student: bool = True,
        include_faculty: bool = True,
    ) -> "BookingResponse":
        student = None
        if include_student and booking.student is not None:
            student = BookingStudentSummary(
                id=booking.student.id,
                name=booking.student.name,
                email=booking.student.email,
                student_department=booking.student.student_department,
                batch_no=booking.student.batch_no,
            )

        faculty = None
        profile = booking.faculty_profile
        if include_faculty and profile is not None and profile.user is not None:
            faculty = BookingFacultySummary(
                id=profile.id,
                name=profile.user.name,
                email=profile.user.email,
            )

        return cls(
            id=booking.id,
            student_id=booking.student_id,
            faculty_id=booking.faculty_profile_id,
            requested_date_time=booking.requested_date_time,
            duration_minutes=booking.duration_minutes,
            topic=booking.topic,
            student_message=booking.student_message or "",
            final_date_time=booking.final_date_time,
            room_number=booking.room_number,
            status=booking.status,
            created_at=booking.created_at,
            student=student,
            faculty=faculty,
        )


class BookingActionResponse(StrictModel):
    message: str
    booking: BookingResponse
