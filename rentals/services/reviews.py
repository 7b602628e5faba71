"""Review recording: one immutable row per customer rating of a booking."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from rentals.domain.entities import Principal
from rentals.domain.enums import BookingStatus
from rentals.domain.errors import NotFound, NotReviewable, Unauthorized
from rentals.infrastructure.models import ReviewModel
from rentals.infrastructure.repositories import BookingRepository, ReviewRepository

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.bookings = BookingRepository(session)
        self.reviews = ReviewRepository(session)

    async def create(
        self,
        caller: Principal,
        booking_id: int,
        rating: int,
        comment: Optional[str] = None,
    ) -> ReviewModel:
        # Rating range is enforced by the request schema, not here.
        booking = await self.bookings.get_by_id(booking_id)
        if booking is None:
            raise NotFound(f"Booking {booking_id} not found")
        if booking.customer_id != caller.id:
            logger.warning(
                "User %d attempted to review booking %d owned by %d",
                caller.id, booking_id, booking.customer_id,
            )
            raise Unauthorized("Not authorized to review this booking")
        if booking.status != BookingStatus.COMPLETED:
            raise NotReviewable("Only completed bookings can be reviewed")
        if await self.reviews.get_by_booking(booking_id) is not None:
            raise NotReviewable(f"Booking {booking_id} has already been reviewed")

        review = await self.reviews.create(
            booking_id=booking_id, rating=rating, comment=comment or None
        )
        logger.info("Review %d recorded for booking %d", review.id, booking_id)
        return review

    async def list_for_vehicle(self, vehicle_id: int) -> list[ReviewModel]:
        return await self.reviews.get_for_vehicle(vehicle_id)
