"""
Availability rule.

A vehicle is bookable iff its ``available`` flag is set.  There is no
date-overlap calendar: the single flag serializes a vehicle to at most one
active booking regardless of the requested dates.
"""

from __future__ import annotations

from .enums import ACTIVE_BOOKING_STATUSES, BookingStatus

RELEASING_STATUSES = frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED})


def is_bookable(vehicle) -> bool:
    return vehicle.available is True


def releases_vehicle(status: BookingStatus) -> bool:
    """True when moving a booking to *status* frees its vehicle."""
    return BookingStatus(status) in RELEASING_STATUSES


def holds_vehicle(status: BookingStatus) -> bool:
    """True while a booking in *status* keeps its vehicle reserved."""
    return BookingStatus(status) in ACTIVE_BOOKING_STATUSES
