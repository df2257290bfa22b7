# backend/consultation_portal/services/__init__.py
"""
Service layer for the consultation portal.

Business logic lives here; routes translate HTTP to service calls and
service results back to response schemas.
"""

from .auth_service import AuthService, IssuedCredential
from .base import BaseService
from .booking_service import BookingService
from .email import EmailService
from .faculty_service import FacultyService
from .notification_service import NotificationService
from .profile_service import ProfileService
from .template_service import TemplateService

__all__ = [
    "AuthService",
    "BaseService",
    "BookingService",
    "EmailService",
    "FacultyService",
    "IssuedCredential",
    "NotificationService",
    "ProfileService",
    "TemplateService",
]
