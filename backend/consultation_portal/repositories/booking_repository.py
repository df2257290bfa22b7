# backend/consultation_portal/repositories/booking_repository.py
"""
Booking Repository for the consultation portal

Implements the booking store:
- Booking CRUD operations (no physical deletes are issued by services)
- Participant-specific queries (student/faculty)
- Booking relationships eager loading
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.faculty import FacultyProfile
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking data access."""

    def __init__(self, db: Session):
        """Initialize with Booking model."""
        super().__init__(db, Booking)
        self.logger = logging.getLogger(__name__)

    def get_booking_with_details(self, booking_id: str) -> Optional[Booking]:
        """
        Get a booking with student and faculty (profile + account) loaded.

        Args:
            booking_id: The booking ID

        Returns:
            The booking with all relationships, or None if not found
        """
        try:
            booking: Booking | None = (
                self._apply_eager_loading(self.db.query(Booking))
                .filter(Booking.id == booking_id)
                .first()
            )
            return booking
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting booking details: {str(e)}")
            raise RepositoryException(f"Failed to get booking details: {str(e)}") from e

    def get_student_bookings(self, student_id: str) -> List[Booking]:
        """Bookings requested by a student, newest first."""
        try:
            return (
                self._apply_eager_loading(self.db.query(Booking))
                .filter(Booking.student_id == student_id)
                .order_by(Booking.created_at.desc(), Booking.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting student bookings: {str(e)}")
            raise RepositoryException(f"Failed to get student bookings: {str(e)}") from e

    def get_faculty_bookings(self, faculty_profile_id: str) -> List[Booking]:
        """Bookings addressed to a faculty profile, newest first."""
        try:
            return (
                self._apply_eager_loading(self.db.query(Booking))
                .filter(Booking.faculty_profile_id == faculty_profile_id)
                .order_by(Booking.created_at.desc(), Booking.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting faculty bookings: {str(e)}")
            raise RepositoryException(f"Failed to get faculty bookings: {str(e)}") from e

    def _apply_eager_loading(self, query: Query) -> Query:
        """Include both participants by default."""
        return query.options(
            joinedload(Booking.student),
            joinedload(Booking.faculty_profile).joinedload(FacultyProfile.user),
        )
