"""Request and response schemas (camelCase on the wire)."""

from .auth import (
    AuthResponse,
    FacultyRegistration,
    LoginRequest,
    RegisterResponse,
    RegistrationRequest,
    StudentRegistration,
)
from .booking import (
    BookingActionResponse,
    BookingCreate,
    BookingFacultySummary,
    BookingResponse,
    BookingStatusUpdate,
    BookingStudentSummary,
)
from .faculty import FacultyDirectoryEntry, FacultyProfileResponse
from .profile import (
    FacultyProfileUpdate,
    FacultyProfileUpdateResponse,
    StudentProfileUpdate,
    StudentProfileUpdateResponse,
)

__all__ = [
    "AuthResponse",
    "BookingActionResponse",
    "BookingCreate",
    "BookingFacultySummary",
    "BookingResponse",
    "BookingStatusUpdate",
    "BookingStudentSummary",
    "FacultyDirectoryEntry",
    "FacultyProfileResponse",
    "FacultyProfileUpdate",
    "FacultyProfileUpdateResponse",
    "FacultyRegistration",
    "LoginRequest",
    "RegisterResponse",
    "RegistrationRequest",
    "StudentProfileUpdate",
    "StudentProfileUpdateResponse",
    "StudentRegistration",
]
