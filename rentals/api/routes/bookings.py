"""
Booking endpoints
=================

POST  /api/v1/bookings                    -- book a vehicle (customers only)
GET   /api/v1/bookings/user               -- the caller's bookings
GET   /api/v1/bookings/provider           -- bookings on the caller's vehicles
PATCH /api/v1/bookings/{booking_id}/status -- confirm, complete or cancel
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.api.dependencies import get_db, get_principal, strict_transitions
from rentals.api.middleware import RATE_LIMIT, limiter
from rentals.api.schemas import (
    BookingCreateRequest,
    BookingResponse,
    BookingStatusUpdateRequest,
    ErrorResponse,
)
from rentals.domain.entities import Principal
from rentals.services.bookings import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post(
    "",
    status_code=201,
    response_model=BookingResponse,
    summary="Book a vehicle",
    responses={
        400: {"model": ErrorResponse, "description": "Vehicle unavailable or invalid date range."},
        404: {"model": ErrorResponse, "description": "Vehicle not found."},
    },
)
@limiter.limit(RATE_LIMIT)
async def create_booking(
    request: Request,
    body: BookingCreateRequest,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await BookingService(db).create(
        principal, body.vehicle_id, body.start_date, body.end_date
    )


@router.get(
    "/user",
    response_model=list[BookingResponse],
    summary="List the caller's bookings",
)
@limiter.limit(RATE_LIMIT)
async def user_bookings(
    request: Request,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await BookingService(db).list_for_customer(principal)


@router.get(
    "/provider",
    response_model=list[BookingResponse],
    summary="List bookings on the caller's vehicles",
)
@limiter.limit(RATE_LIMIT)
async def provider_bookings(
    request: Request,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await BookingService(db).list_for_provider(principal)


@router.patch(
    "/{booking_id}/status",
    response_model=BookingResponse,
    summary="Update a booking's status",
    responses={409: {"model": ErrorResponse, "description": "Transition rejected in strict mode."}},
    description=(
        "COMPLETED and CANCELLED hand the vehicle back to the pool. "
        "Re-sending the current status is a no-op."
    ),
)
@limiter.limit(RATE_LIMIT)
async def update_booking_status(
    request: Request,
    booking_id: int,
    body: BookingStatusUpdateRequest,
    principal: Principal = Depends(get_principal),
    strict: bool = Depends(strict_transitions),
    db: AsyncSession = Depends(get_db),
):
    service = BookingService(db, strict_transitions=strict)
    return await service.update_status(principal, booking_id, body.status)
