"""
Admin / observability endpoints
===============================

GET /api/v1/admin/active-bookings -- all PENDING / CONFIRMED bookings
GET /api/v1/admin/health          -- simple health check
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.api.dependencies import get_db
from rentals.api.middleware import RATE_LIMIT, limiter
from rentals.api.schemas import BookingResponse, HealthResponse
from rentals.domain.enums import ACTIVE_BOOKING_STATUSES
from rentals.infrastructure.models import BookingModel
from rentals.infrastructure.repositories import BookingRepository

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/active-bookings",
    response_model=list[BookingResponse],
    summary="List all bookings currently holding a vehicle",
)
@limiter.limit(RATE_LIMIT)
async def get_active_bookings(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    return await BookingRepository(db).list(
        BookingModel.status.in_(list(ACTIVE_BOOKING_STATUSES))
    )


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
