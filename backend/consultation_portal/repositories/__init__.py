"""
Repository Pattern Implementation for the consultation portal

This package provides the repository layer for data access,
separating business logic from database queries.

Key Components:
- BaseRepository: Foundation for all repositories with generic CRUD operations
- RepositoryFactory: Factory for creating repository instances
- UserRepository / FacultyProfileRepository: identity store
- BookingRepository: booking store

Usage:
    from consultation_portal.repositories import RepositoryFactory

    repository = RepositoryFactory.create_booking_repository(db)
    bookings = repository.get_student_bookings(student_id)
"""

from .base_repository import BaseRepository
from .booking_repository import BookingRepository
from .factory import RepositoryFactory
from .faculty_profile_repository import FacultyProfileRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "FacultyProfileRepository",
    "RepositoryFactory",
    "UserRepository",
]
