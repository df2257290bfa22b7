# backend/consultation_portal/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected.

The notifier is built once per process from settings and handed to the
booking service explicitly; tests replace it through dependency_overrides.
"""

from functools import lru_cache
import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ...core.config import settings
from ...services.auth_service import AuthService
from ...services.booking_service import BookingService
from ...services.email import EmailService
from ...services.faculty_service import FacultyService
from ...services.notification_service import NotificationService
from ...services.profile_service import ProfileService
from .database import get_db

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_notification_service() -> NotificationService:
    """
    Process-wide notifier.

    Email delivery is enabled only when provider credentials were present
    when the notifier was first built.
    """
    email_service: Optional[EmailService] = None
    if settings.notifications_enabled:
        email_service = EmailService(
            api_key=settings.resend_api_key, from_email=settings.from_email
        )
    else:
        logger.info("RESEND_API_KEY not set; booking emails will not be sent")
    return NotificationService(email_service=email_service)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Get AuthService instance with proper dependencies."""
    return AuthService(db)


def get_booking_service(
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
) -> BookingService:
    """
    Get booking service instance.

    Args:
        db: Database session
        notification_service: Process-wide notifier

    Returns:
        BookingService instance
    """
    return BookingService(db, notification_service=notification_service)


def get_faculty_service(db: Session = Depends(get_db)) -> FacultyService:
    return FacultyService(db)


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)
