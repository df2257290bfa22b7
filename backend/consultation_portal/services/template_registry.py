"""
Template registry and subject builders for notification emails.

Subjects stay in code for logging and versioning; bodies live in Jinja templates.
"""

from enum import Enum
from typing import Final, Optional

from ..core.constants import BRAND_NAME
from ..models.booking import BookingStatus


class TemplateRegistry(str, Enum):
    BOOKING_NEW_REQUEST = "email/new_booking_request.html"
    BOOKING_APPROVED = "email/booking_approved.html"
    BOOKING_REJECTED = "email/booking_rejected.html"
    BOOKING_CANCELLED = "email/booking_cancelled.html"
    BOOKING_RESCHEDULE = "email/booking_reschedule.html"


STATUS_TEMPLATES: Final[dict[BookingStatus, TemplateRegistry]] = {
    BookingStatus.APPROVED: TemplateRegistry.BOOKING_APPROVED,
    BookingStatus.REJECTED: TemplateRegistry.BOOKING_REJECTED,
    BookingStatus.CANCELLED: TemplateRegistry.BOOKING_CANCELLED,
    BookingStatus.RESCHEDULE: TemplateRegistry.BOOKING_RESCHEDULE,
}


class EmailSubject:
    """Utility class with static builders for email subjects."""

    @staticmethod
    def new_booking_request(student_name: str) -> str:
        return f"[{BRAND_NAME}] New Booking Request from {student_name}"

    @staticmethod
    def status_change(status: BookingStatus, faculty_name: str) -> Optional[str]:
        """Subject for a status email, or None when the status sends nothing."""
        if status == BookingStatus.APPROVED:
            return f"Your Consultation with {faculty_name} is CONFIRMED"
        if status == BookingStatus.REJECTED:
            return f"Your Consultation with {faculty_name} was Rejected"
        if status == BookingStatus.CANCELLED:
            return f"Your Consultation with {faculty_name} was Cancelled"
        if status == BookingStatus.RESCHEDULE:
            return f"Consultation with {faculty_name} Requires Reschedule"
        return None
