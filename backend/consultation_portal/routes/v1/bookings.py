# backend/consultation_portal/routes/v1/bookings.py
"""
Booking routes - API v1

Endpoints:
    POST /                        → Student requests a consultation
    GET /my                       → Caller's bookings, newest first
    PUT /{booking_id}/status      → Faculty approve, reject or reschedule
    DELETE /{booking_id}          → Student cancels (record is kept)
"""

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Path, status

from ...api.dependencies.auth import get_current_principal
from ...api.dependencies.services import get_booking_service
from ...core.exceptions import DomainException
from ...errors import handle_domain_exception
from ...principal import AccountPrincipal, FacultyPrincipal
from ...schemas.booking import (
    BookingActionResponse,
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
)
from ...services.booking_service import BookingService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["bookings-v1"])


@router.post(
    "",
    response_model=BookingActionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Only students can create bookings"}},
)
async def create_booking(
    payload: BookingCreate = Body(...),
    principal: AccountPrincipal = Depends(get_current_principal),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingActionResponse:
    """Create a pending booking; the faculty member is emailed after commit."""
    try:
        booking = await booking_service.create_booking(principal, payload)
        return BookingActionResponse(
            message="Booking request submitted successfully.",
            booking=BookingResponse.from_booking(booking),
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/my", response_model=List[BookingResponse])
async def get_my_bookings(
    principal: AccountPrincipal = Depends(get_current_principal),
    booking_service: BookingService = Depends(get_booking_service),
) -> List[BookingResponse]:
    """
    Students see the faculty member of each booking, faculty see the student.
    """
    try:
        bookings = await asyncio.to_thread(booking_service.get_my_bookings, principal)
    except DomainException as e:
        handle_domain_exception(e)

    is_faculty = isinstance(principal, FacultyPrincipal)
    return [
        BookingResponse.from_booking(
            booking, include_student=is_faculty, include_faculty=not is_faculty
        )
        for booking in bookings
    ]


@router.put(
    "/{booking_id}/status",
    response_model=BookingActionResponse,
    responses={
        400: {"description": "Invalid status, transition or missing schedule"},
        403: {"description": "Booking belongs to another faculty member"},
        404: {"description": "Booking not found"},
    },
)
async def update_booking_status(
    booking_id: str = Path(..., description="Booking id"),
    payload: BookingStatusUpdate = Body(...),
    principal: AccountPrincipal = Depends(get_current_principal),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingActionResponse:
    try:
        booking = await booking_service.update_status(
            principal,
            booking_id,
            payload.status,
            final_date_time=payload.final_date_time,
            room_number=payload.room_number,
        )
        return BookingActionResponse(
            message=f"Booking status updated to {booking.status}.",
            booking=BookingResponse.from_booking(booking),
        )
    except DomainException as e:
        handle_domain_exception(e)


@router.delete(
    "/{booking_id}",
    response_model=BookingActionResponse,
    responses={
        400: {"description": "Booking can no longer be cancelled"},
        403: {"description": "Booking belongs to another student"},
        404: {"description": "Booking not found"},
    },
)
async def cancel_booking(
    booking_id: str = Path(..., description="Booking id"),
    principal: AccountPrincipal = Depends(get_current_principal),
    booking_service: BookingService = Depends(get_booking_service),
) -> BookingActionResponse:
    try:
        booking = await booking_service.cancel_booking(principal, booking_id)
        return BookingActionResponse(
            message="Booking cancelled successfully.",
            booking=BookingResponse.from_booking(booking),
        )
    except DomainException as e:
        handle_domain_exception(e)
