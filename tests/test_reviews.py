"""Review recording tests."""

from datetime import datetime

import pytest
import pytest_asyncio

from sqlalchemy.exc import IntegrityError

from rentals.domain.enums import BookingStatus, PaymentStatus, UserRole
from rentals.domain.errors import NotFound, NotReviewable, Unauthorized
from rentals.infrastructure.repositories import BookingRepository, ReviewRepository
from rentals.services.bookings import BookingService
from rentals.services.reviews import ReviewService
from tests.factories import make_user, make_vehicle, principal


@pytest_asyncio.fixture
async def completed(db_session):
    provider_row = await make_user(db_session, "provider", role=UserRole.PROVIDER)
    provider = principal(provider_row)
    customer = principal(await make_user(db_session, "customer"))
    vehicle = await make_vehicle(db_session, provider_row)

    bookings = BookingService(db_session)
    booking = await bookings.create(
        customer, vehicle.id, datetime(2025, 1, 1), datetime(2025, 1, 3)
    )
    await bookings.update_status(provider, booking.id, BookingStatus.CONFIRMED)
    await bookings.update_status(provider, booking.id, BookingStatus.COMPLETED)
    return {"provider": provider, "customer": customer, "vehicle": vehicle, "booking": booking}


class TestCreateReview:
    @pytest.mark.asyncio
    async def test_customer_reviews_own_booking(self, db_session, completed):
        review = await ReviewService(db_session).create(
            completed["customer"], completed["booking"].id, 5, "Great ride"
        )
        assert review.id == 1
        assert review.booking_id == completed["booking"].id
        assert review.rating == 5
        assert review.comment == "Great ride"
        assert review.created_at is not None

    @pytest.mark.asyncio
    async def test_empty_comment_stored_as_null(self, db_session, completed):
        review = await ReviewService(db_session).create(
            completed["customer"], completed["booking"].id, 4, ""
        )
        assert review.comment is None

    @pytest.mark.asyncio
    async def test_other_user_is_unauthorized(self, db_session, completed):
        with pytest.raises(Unauthorized):
            await ReviewService(db_session).create(
                completed["provider"], completed["booking"].id, 1
            )

    @pytest.mark.asyncio
    async def test_unknown_booking(self, db_session, completed):
        with pytest.raises(NotFound):
            await ReviewService(db_session).create(completed["customer"], 999, 5)

    @pytest.mark.asyncio
    async def test_service_does_not_clamp_rating(self, db_session, completed):
        review = await ReviewService(db_session).create(
            completed["customer"], completed["booking"].id, 9
        )
        assert review.rating == 9

    @pytest.mark.asyncio
    async def test_pending_booking_not_reviewable(self, db_session, completed):
        pending = await BookingService(db_session).create(
            completed["customer"],
            completed["vehicle"].id,
            datetime(2025, 2, 1),
            datetime(2025, 2, 2),
        )
        with pytest.raises(NotReviewable):
            await ReviewService(db_session).create(completed["customer"], pending.id, 4)
        assert await ReviewService(db_session).list_for_vehicle(completed["vehicle"].id) == []

    @pytest.mark.asyncio
    async def test_one_review_per_booking(self, db_session, completed):
        service = ReviewService(db_session)
        await service.create(completed["customer"], completed["booking"].id, 5)

        with pytest.raises(NotReviewable):
            await service.create(completed["customer"], completed["booking"].id, 2)

        reviews = await service.list_for_vehicle(completed["vehicle"].id)
        assert [r.rating for r in reviews] == [5]

    @pytest.mark.asyncio
    async def test_store_rejects_second_review_row(self, store):
        with pytest.raises(IntegrityError):
            async with store.session() as session:
                provider = await make_user(session, "provider", role=UserRole.PROVIDER)
                customer = await make_user(session, "customer")
                vehicle = await make_vehicle(session, provider)
                booking = await BookingRepository(session).create(
                    vehicle_id=vehicle.id,
                    customer_id=customer.id,
                    start_date=datetime(2025, 1, 1),
                    end_date=datetime(2025, 1, 3),
                    status=BookingStatus.COMPLETED,
                    total_amount=100,
                    payment_status=PaymentStatus.COMPLETED,
                )
                reviews = ReviewRepository(session)
                await reviews.create(booking_id=booking.id, rating=5)
                await reviews.create(booking_id=booking.id, rating=1)


class TestVehicleReviews:
    @pytest.mark.asyncio
    async def test_lists_reviews_across_bookings(self, db_session, completed):
        service = ReviewService(db_session)
        bookings = BookingService(db_session)
        second = await bookings.create(
            completed["customer"],
            completed["vehicle"].id,
            datetime(2025, 2, 1),
            datetime(2025, 2, 2),
        )
        await bookings.update_status(completed["provider"], second.id, BookingStatus.COMPLETED)
        await service.create(completed["customer"], completed["booking"].id, 5)
        await service.create(completed["customer"], second.id, 3)

        reviews = await service.list_for_vehicle(completed["vehicle"].id)
        assert [r.rating for r in reviews] == [5, 3]

    @pytest.mark.asyncio
    async def test_vehicle_without_reviews(self, db_session, completed):
        assert await ReviewService(db_session).list_for_vehicle(completed["vehicle"].id) == []
