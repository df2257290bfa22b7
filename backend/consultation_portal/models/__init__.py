"""SQLAlchemy models; importing this package registers every table on Base."""

from .booking import Booking, BookingStatus
from .faculty import FacultyProfile
from .user import User

__all__ = ["Booking", "BookingStatus", "FacultyProfile", "User"]
