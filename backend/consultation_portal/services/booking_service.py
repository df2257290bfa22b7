# backend/consultation_portal/services/booking_service.py
"""
Booking Service for the consultation portal

Owns the booking lifecycle:
- Students create requests and cancel their own bookings
- Faculty approve, reject or reschedule bookings addressed to their profile
- Every change is committed before the matching email is attempted

Store work runs in a worker thread (sync SQLAlchemy session); the notifier
is awaited afterwards and its failures never undo a committed change.
"""

import asyncio
from datetime import datetime
import logging
from typing import Any, Awaitable, Callable, List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import (
    DependencyUnavailableException,
    NotAuthorizedException,
    NotFoundException,
    RepositoryException,
)
from ..domain.booking_transitions import apply_transition, parse_faculty_target
from ..models.booking import Booking, BookingStatus
from ..models.faculty import FacultyProfile
from ..principal import AccountPrincipal, FacultyPrincipal, StudentPrincipal
from ..repositories.booking_repository import BookingRepository
from ..repositories.factory import RepositoryFactory
from ..repositories.faculty_profile_repository import FacultyProfileRepository
from ..repositories.user_repository import UserRepository
from ..schemas.booking import BookingCreate
from .base import BaseService
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class BookingService(BaseService):
    """
    Service layer for booking operations.

    Ownership is always resolved from the caller's own account: a faculty
    member owns a booking when the booking targets the profile linked to
    their account, a student when they are the booking's student.
    """

    def __init__(
        self,
        db: Session,
        notification_service: Optional[NotificationService] = None,
        repository: Optional[BookingRepository] = None,
        faculty_profile_repository: Optional[FacultyProfileRepository] = None,
        user_repository: Optional[UserRepository] = None,
    ):
        """
        Initialize booking service.

        Args:
            db: Database session
            notification_service: Notifier; None disables notifications
            repository: Optional BookingRepository instance
            faculty_profile_repository: Optional FacultyProfileRepository instance
            user_repository: Optional UserRepository instance
        """
        super().__init__(db)
        self.notification_service = notification_service
        self.repository = repository or RepositoryFactory.create_booking_repository(db)
        self.faculty_profile_repository = (
            faculty_profile_repository or RepositoryFactory.create_faculty_profile_repository(db)
        )
        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @BaseService.measure_operation("create_booking")
    async def create_booking(self, principal: AccountPrincipal, data: BookingCreate) -> Booking:
        """
        Create a pending booking request and notify the faculty member.

        Raises:
            NotAuthorizedException: Caller is not a student
            NotFoundException: Faculty profile or student account missing
        """
        booking = await asyncio.to_thread(self._create_booking, principal, data)

        student = booking.student
        faculty_user = booking.faculty_profile.user
        await self._notify(
            booking.id,
            lambda notifier: notifier.notify_new_request(
                faculty_user.email,
                student.name,
                booking.topic,
                {
                    "booking_id": booking.id,
                    "student_email": student.email,
                    "student_department": student.student_department,
                    "student_batch_no": student.batch_no,
                    "student_message": booking.student_message,
                },
            ),
        )
        return booking

    def _create_booking(self, principal: AccountPrincipal, data: BookingCreate) -> Booking:
        if not isinstance(principal, StudentPrincipal):
            raise NotAuthorizedException("Only students can create bookings.")

        with self.transaction():
            profile = self.faculty_profile_repository.get_by_id(data.faculty_id)
            student = self.user_repository.get_by_id(principal.user_id, load_relationships=False)
            if profile is None or student is None:
                raise NotFoundException("Faculty or student not found.")

            created = self.repository.create(
                student_id=student.id,
                faculty_profile_id=profile.id,
                requested_date_time=data.date_time,
                duration_minutes=data.duration_minutes,
                topic=data.topic,
                student_message=data.student_message,
                status=BookingStatus.PENDING.value,
            )
            booking_id = created.id

        booking = self._load_booking(booking_id)
        self.log_operation(
            "create_booking",
            booking_id=booking.id,
            student_id=booking.student_id,
            faculty_profile_id=booking.faculty_profile_id,
        )
        return booking

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @BaseService.measure_operation("get_my_bookings")
    def get_my_bookings(self, principal: AccountPrincipal) -> List[Booking]:
        """
        Bookings visible to the caller, newest first.

        Students get the bookings they requested; faculty get the bookings
        addressed to their linked profile.

        Raises:
            NotFoundException: Faculty account has no linked profile
        """
        try:
            if isinstance(principal, FacultyPrincipal):
                profile = self.faculty_profile_repository.get_by_user_id(principal.user_id)
                if profile is None:
                    raise NotFoundException("Faculty profile not linked.")
                return self.repository.get_faculty_bookings(profile.id)
            return self.repository.get_student_bookings(principal.user_id)
        except RepositoryException as exc:
            raise DependencyUnavailableException() from exc

    # ------------------------------------------------------------------
    # Faculty decision
    # ------------------------------------------------------------------

    @BaseService.measure_operation("update_booking_status")
    async def update_status(
        self,
        principal: AccountPrincipal,
        booking_id: str,
        status: str,
        final_date_time: Optional[datetime] = None,
        room_number: Optional[str] = None,
    ) -> Booking:
        """
        Approve, reject or reschedule a booking as its faculty owner.

        Checks run in a fixed order: status value, booking existence,
        ownership, transition, required schedule fields.

        Raises:
            ValidationFailedException: Status not settable by faculty, or
                approval without both schedule fields
            NotFoundException: Booking does not exist
            NotAuthorizedException: Caller does not own the booking
            InvalidTransitionException: Move not allowed from current status
        """
        booking = await asyncio.to_thread(
            self._update_status, principal, booking_id, status, final_date_time, room_number
        )

        student = booking.student
        faculty_name = booking.faculty_profile.user.name
        await self._notify(
            booking.id,
            lambda notifier: notifier.notify_status_change(
                student.email,
                booking.status,
                faculty_name,
                {
                    "booking_id": booking.id,
                    "topic": booking.topic,
                    "final_date_time": booking.final_date_time,
                    "room_number": booking.room_number,
                },
            ),
        )
        return booking

    def _update_status(
        self,
        principal: AccountPrincipal,
        booking_id: str,
        status: str,
        final_date_time: Optional[datetime],
        room_number: Optional[str],
    ) -> Booking:
        target = parse_faculty_target(status)

        with self.transaction():
            booking = self._get_booking_or_404(booking_id)
            self._ensure_faculty_owner(principal, booking)

            previous = apply_transition(
                booking, target, final_date_time=final_date_time, room_number=room_number
            )
            self.repository.flush()

        self.logger.info(f"Booking {booking.id} status {previous.value} -> {booking.status}")
        self.log_operation(
            "update_booking_status",
            booking_id=booking.id,
            from_status=previous.value,
            to_status=booking.status,
        )
        return booking

    # ------------------------------------------------------------------
    # Student cancellation
    # ------------------------------------------------------------------

    @BaseService.measure_operation("cancel_booking")
    async def cancel_booking(self, principal: AccountPrincipal, booking_id: str) -> Booking:
        """
        Cancel a booking as its student.

        Bookings are never deleted; the record stays with status cancelled
        and its schedule cleared.

        Raises:
            NotFoundException: Booking does not exist
            NotAuthorizedException: Caller is not the booking's student
            InvalidTransitionException: Booking is already rejected, cancelled or completed
        """
        booking = await asyncio.to_thread(self._cancel_booking, principal, booking_id)

        student = booking.student
        faculty_name = booking.faculty_profile.user.name
        await self._notify(
            booking.id,
            lambda notifier: notifier.notify_status_change(
                student.email,
                BookingStatus.CANCELLED,
                faculty_name,
                {"booking_id": booking.id, "topic": booking.topic},
            ),
        )
        return booking

    def _cancel_booking(self, principal: AccountPrincipal, booking_id: str) -> Booking:
        with self.transaction():
            booking = self._get_booking_or_404(booking_id)
            if not isinstance(principal, StudentPrincipal) or booking.student_id != principal.user_id:
                self.logger.warning(
                    f"User {principal.id} attempted to cancel booking {booking_id} they do not own"
                )
                raise NotAuthorizedException("Not authorized to cancel this booking.")

            previous = apply_transition(booking, BookingStatus.CANCELLED)
            self.repository.flush()

        self.logger.info(f"Booking {booking.id} status {previous.value} -> {booking.status}")
        self.log_operation("cancel_booking", booking_id=booking.id, from_status=previous.value)
        return booking

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_booking_or_404(self, booking_id: str) -> Booking:
        booking = self.repository.get_booking_with_details(booking_id)
        if booking is None:
            raise NotFoundException("Booking not found.")
        return booking

    def _load_booking(self, booking_id: str) -> Booking:
        try:
            booking = self.repository.get_booking_with_details(booking_id)
        except RepositoryException as exc:
            raise DependencyUnavailableException() from exc
        if booking is None:
            raise NotFoundException("Booking not found.")
        return booking

    def _ensure_faculty_owner(self, principal: AccountPrincipal, booking: Booking) -> FacultyProfile:
        """Resolve the caller's own profile and compare it with the booking's target."""
        profile = None
        if isinstance(principal, FacultyPrincipal):
            profile = self.faculty_profile_repository.get_by_user_id(principal.user_id)
        if profile is None or booking.faculty_profile_id != profile.id:
            self.logger.warning(
                f"User {principal.id} attempted to update booking {booking.id} they do not own"
            )
            raise NotAuthorizedException("Not authorized to update this booking.")
        return profile

    async def _notify(
        self,
        booking_id: str,
        send: Callable[[NotificationService], Awaitable[Any]],
    ) -> None:
        """Attempt a notification after the change is committed; failures are only logged."""
        if self.notification_service is None:
            return
        try:
            await send(self.notification_service)
        except Exception as e:
            self.logger.error(
                f"Notification for booking {booking_id} failed: {str(e)}", exc_info=True
            )
