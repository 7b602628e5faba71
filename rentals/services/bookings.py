"""
Booking lifecycle
=================

create          -- reserve a vehicle, price the rental, insert a PENDING booking
update_status   -- write a booking status; COMPLETED and CANCELLED hand the
                   vehicle back unless another active booking holds it

Atomicity
---------
The availability flip is a compare-and-swap on the vehicle row executed in
the same unit of work as the booking insert.  Two concurrent requests for
the same vehicle can both pass the read-side availability check, but only
one swap matches a row; the loser fails with ``Unavailable`` and its
transaction rolls back with nothing written.

Reopening a finished booking (only possible with lenient transitions) goes
through the same swap, so the flag never covers two active bookings.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from rentals.domain.availability import holds_vehicle, is_bookable, releases_vehicle
from rentals.domain.entities import Principal, check_transition
from rentals.domain.enums import BookingStatus, PaymentStatus
from rentals.domain.errors import NotFound, Unauthorized, Unavailable
from rentals.domain.pricing import total_amount, validate_range
from rentals.infrastructure.models import BookingModel
from rentals.infrastructure.repositories import BookingRepository, VehicleRepository

logger = logging.getLogger(__name__)


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class BookingService:
    def __init__(self, session: AsyncSession, strict_transitions: bool = False):
        self.session = session
        self.strict_transitions = strict_transitions
        self.bookings = BookingRepository(session)
        self.vehicles = VehicleRepository(session)

    async def create(
        self,
        caller: Principal,
        vehicle_id: int,
        start_date: datetime,
        end_date: datetime,
    ) -> BookingModel:
        if not caller.is_customer:
            raise Unauthorized("Only customers can create bookings")

        vehicle = await self.vehicles.get_by_id(vehicle_id)
        if vehicle is None:
            raise NotFound(f"Vehicle {vehicle_id} not found")
        if not is_bookable(vehicle):
            raise Unavailable("Vehicle not available")

        start_date, end_date = _as_naive_utc(start_date), _as_naive_utc(end_date)
        validate_range(start_date, end_date)
        amount = total_amount(vehicle.price, start_date, end_date)

        if not await self.vehicles.reserve(vehicle_id):
            logger.info("Vehicle %d reserved concurrently; rejecting booking", vehicle_id)
            raise Unavailable("Vehicle not available")

        booking = await self.bookings.create(
            vehicle_id=vehicle_id,
            customer_id=caller.id,
            start_date=start_date,
            end_date=end_date,
            status=BookingStatus.PENDING,
            total_amount=amount,
            payment_status=PaymentStatus.COMPLETED,
        )
        logger.info(
            "Booking %d created: vehicle=%d customer=%d total=%d",
            booking.id, vehicle_id, caller.id, amount,
        )
        return booking

    async def update_status(
        self, caller: Principal, booking_id: int, new_status: BookingStatus
    ) -> BookingModel:
        new_status = BookingStatus(new_status)
        booking = await self.bookings.get_by_id(booking_id)
        if booking is None:
            raise NotFound(f"Booking {booking_id} not found")

        vehicle = await self.vehicles.get_by_id(booking.vehicle_id)
        owns_vehicle = vehicle is not None and vehicle.provider_id == caller.id
        if booking.customer_id != caller.id and not owns_vehicle:
            raise Unauthorized("Not authorized to update this booking")

        changed = check_transition(
            booking.status, new_status, strict=self.strict_transitions
        )
        previous = BookingStatus(booking.status)

        # Reopening a finished booking has to win the vehicle back first
        if changed and releases_vehicle(previous) and not releases_vehicle(new_status):
            if not await self.vehicles.reserve(booking.vehicle_id):
                raise Unavailable("Vehicle not available")

        if changed:
            booking.status = new_status
            logger.info("Booking %d: %s -> %s", booking.id, previous.value, new_status.value)

        if releases_vehicle(new_status):
            if await self._vehicle_held_elsewhere(booking):
                logger.info(
                    "Vehicle %d stays reserved by another booking", booking.vehicle_id
                )
            else:
                await self.vehicles.release(booking.vehicle_id)

        await self.session.flush()
        return booking

    async def _vehicle_held_elsewhere(self, booking: BookingModel) -> bool:
        others = await self.bookings.get_by_vehicle(booking.vehicle_id)
        return any(
            b.id != booking.id and holds_vehicle(b.status) for b in others
        )

    async def list_for_customer(self, caller: Principal) -> list[BookingModel]:
        return await self.bookings.get_by_customer(caller.id)

    async def list_for_provider(self, caller: Principal) -> list[BookingModel]:
        if not caller.is_provider:
            raise Unauthorized("Only providers can view incoming bookings")
        return await self.bookings.get_by_provider(caller.id)
