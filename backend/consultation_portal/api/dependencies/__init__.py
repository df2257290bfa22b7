# backend/consultation_portal/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .auth import get_current_principal, resolve_principal
from .database import get_db
from .services import (
    get_auth_service,
    get_booking_service,
    get_faculty_service,
    get_notification_service,
    get_profile_service,
)

__all__ = [
    # Auth
    "get_current_principal",
    "resolve_principal",
    # Database
    "get_db",
    # Services
    "get_auth_service",
    "get_booking_service",
    "get_faculty_service",
    "get_notification_service",
    "get_profile_service",
]
