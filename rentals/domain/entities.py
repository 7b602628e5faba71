"""
Domain value objects and booking state rules.

Patterns used
-------------
- ``Principal`` is the authenticated caller handed to every service
  operation; services trust it without re-checking credentials.
- ``check_transition`` validates a status write against the booking lifecycle
  (PENDING -> CONFIRMED -> COMPLETED, with CANCELLED reachable from both
  non-terminal states).  Services call it in lenient mode unless strict
  transitions are configured.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import BOOKING_TRANSITIONS, BookingStatus, UserRole
from .errors import InvalidTransition


@dataclass(frozen=True)
class Principal:
    id: int
    role: UserRole

    @property
    def is_provider(self) -> bool:
        return self.role == UserRole.PROVIDER

    @property
    def is_customer(self) -> bool:
        return self.role == UserRole.CUSTOMER


def check_transition(
    current: BookingStatus, new_status: BookingStatus, strict: bool = True
) -> bool:
    """
    Validate a booking status write.

    Returns ``True`` when the write changes the status and ``False`` when it
    re-writes the current one.  With ``strict`` off every write is accepted.
    """
    current, new_status = BookingStatus(current), BookingStatus(new_status)
    if current == new_status:
        return False
    if strict and new_status not in BOOKING_TRANSITIONS.get(current, set()):
        raise InvalidTransition(
            f"Cannot transition booking from {current.value} to {new_status.value}"
        )
    return True
