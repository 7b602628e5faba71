"""
Review endpoints
================

POST /api/v1/reviews                      -- review one of the caller's bookings
GET  /api/v1/reviews/vehicle/{vehicle_id} -- all reviews of a vehicle
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.api.dependencies import get_db, get_principal
from rentals.api.middleware import RATE_LIMIT, limiter
from rentals.api.schemas import ErrorResponse, ReviewCreateRequest, ReviewResponse
from rentals.domain.entities import Principal
from rentals.services.reviews import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post(
    "",
    status_code=201,
    response_model=ReviewResponse,
    summary="Review a booking",
    responses={409: {"model": ErrorResponse, "description": "Booking not completed or already reviewed."}},
)
@limiter.limit(RATE_LIMIT)
async def create_review(
    request: Request,
    body: ReviewCreateRequest,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await ReviewService(db).create(
        principal, body.booking_id, body.rating, body.comment
    )


@router.get(
    "/vehicle/{vehicle_id}",
    response_model=list[ReviewResponse],
    summary="List reviews of a vehicle",
)
@limiter.limit(RATE_LIMIT)
async def vehicle_reviews(
    request: Request,
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await ReviewService(db).list_for_vehicle(vehicle_id)
