"""Booking status transition rules.

The table below is the complete set of moves a booking can make. Anything
not listed is rejected; ``completed`` has no inbound or outbound move.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Literal, Mapping, Optional

from ..core.exceptions import InvalidTransitionException, ValidationFailedException
from ..models.booking import Booking, BookingStatus

Actor = Literal["student", "faculty"]
ScheduleEffect = Literal["require", "optional", "clear"]


@dataclass(frozen=True)
class TransitionRule:
    target: BookingStatus
    allowed_from: FrozenSet[BookingStatus]
    actor: Actor
    schedule: ScheduleEffect


TRANSITIONS: Mapping[BookingStatus, TransitionRule] = {
    BookingStatus.APPROVED: TransitionRule(
        target=BookingStatus.APPROVED,
        allowed_from=frozenset({BookingStatus.PENDING}),
        actor="faculty",
        schedule="require",
    ),
    BookingStatus.RESCHEDULE: TransitionRule(
        target=BookingStatus.RESCHEDULE,
        allowed_from=frozenset({BookingStatus.PENDING, BookingStatus.APPROVED}),
        actor="faculty",
        schedule="optional",
    ),
    BookingStatus.REJECTED: TransitionRule(
        target=BookingStatus.REJECTED,
        allowed_from=frozenset({BookingStatus.PENDING}),
        actor="faculty",
        schedule="clear",
    ),
    BookingStatus.CANCELLED: TransitionRule(
        target=BookingStatus.CANCELLED,
        allowed_from=frozenset(
            {BookingStatus.PENDING, BookingStatus.APPROVED, BookingStatus.RESCHEDULE}
        ),
        actor="student",
        schedule="clear",
    ),
}

FACULTY_TARGETS: FrozenSet[BookingStatus] = frozenset(
    status for status, rule in TRANSITIONS.items() if rule.actor == "faculty"
)

def parse_faculty_target(raw_status: str) -> BookingStatus:
    """Map a requested status string to a faculty-settable status."""
    try:
        target = BookingStatus(raw_status)
    except ValueError:
        target = None
    if target is None or target not in FACULTY_TARGETS:
        raise ValidationFailedException(
            "Invalid status provided.",
            details={"allowed": sorted(s.value for s in FACULTY_TARGETS)},
        )
    return target


def ensure_transition_allowed(booking: Booking, target: BookingStatus) -> TransitionRule:
    """Raise InvalidTransitionException unless booking may move to target."""
    rule = TRANSITIONS.get(target)
    current = BookingStatus(booking.status)
    if rule is None or current not in rule.allowed_from:
        if target == BookingStatus.CANCELLED:
            message = f"Cannot cancel a booking with status: {current.value}"
        else:
            message = f"Cannot change a booking from {current.value} to {target.value}"
        raise InvalidTransitionException(
            message, current_status=current.value, target_status=target.value
        )
    return rule


def apply_transition(
    booking: Booking,
    target: BookingStatus,
    final_date_time: Optional[datetime] = None,
    room_number: Optional[str] = None,
) -> BookingStatus:
    """
    Validate and apply a status change in memory.

    Returns the status the booking had before the change. The caller is
    responsible for persisting the booking.
    """
    rule = ensure_transition_allowed(booking, target)

    if rule.schedule == "require":
        missing = [
            name
            for name, value in (("finalDateTime", final_date_time), ("roomNumber", room_number))
            if value is None
        ]
        if missing:
            raise ValidationFailedException(
                "Final date/time and room number are required for approval.",
                details={"missing": missing},
            )
        booking.apply_schedule(final_date_time, room_number)
    elif rule.schedule == "optional":
        # Unsupplied fields keep their stored values, so approved -> reschedule
        # leaves a schedule on a booking that is no longer approved.
        booking.apply_schedule(final_date_time, room_number)
    else:
        booking.clear_schedule()

    previous = BookingStatus(booking.status)
    booking.status = target.value
    return previous
