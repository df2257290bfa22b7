# backend/consultation_portal/repositories/factory.py
"""
Repository Factory for the consultation portal

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .booking_repository import BookingRepository
    from .faculty_profile_repository import FacultyProfileRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        """Create repository for account operations."""
        from .user_repository import UserRepository

        return UserRepository(db)

    @staticmethod
    def create_faculty_profile_repository(db: Session) -> "FacultyProfileRepository":
        """Create repository for faculty profile operations with eager-loaded owners."""
        from .faculty_profile_repository import FacultyProfileRepository

        return FacultyProfileRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        """Create repository for booking operations."""
        from .booking_repository import BookingRepository

        return BookingRepository(db)
