"""
Provider dashboard
==================

GET /api/v1/dashboard/stats -- booking counts by status, vehicle counts by type
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.api.dependencies import get_db, get_principal
from rentals.api.middleware import RATE_LIMIT, limiter
from rentals.api.schemas import DashboardStatsResponse
from rentals.domain.entities import Principal
from rentals.services.vehicles import VehicleService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStatsResponse,
    summary="Provider booking and fleet statistics",
)
@limiter.limit(RATE_LIMIT)
async def stats(
    request: Request,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await VehicleService(db).dashboard_stats(principal)
