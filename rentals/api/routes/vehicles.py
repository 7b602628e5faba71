"""
Vehicle endpoints
=================

POST /api/v1/vehicles              -- list a vehicle (providers only)
GET  /api/v1/vehicles/city/{city}  -- available vehicles in a city ("all" for any)
GET  /api/v1/vehicles/provider     -- the caller's own listings
GET  /api/v1/vehicles/{vehicle_id} -- one vehicle
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.api.dependencies import get_db, get_principal
from rentals.api.middleware import RATE_LIMIT, limiter
from rentals.api.schemas import VehicleCreateRequest, VehicleResponse
from rentals.domain.entities import Principal
from rentals.services.vehicles import VehicleService

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.post(
    "",
    status_code=201,
    response_model=VehicleResponse,
    summary="Create a vehicle listing",
)
@limiter.limit(RATE_LIMIT)
async def create_vehicle(
    request: Request,
    body: VehicleCreateRequest,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await VehicleService(db).create(principal, **body.model_dump())


@router.get(
    "/city/{city}",
    response_model=list[VehicleResponse],
    summary="Search available vehicles by city",
)
@limiter.limit(RATE_LIMIT)
async def vehicles_by_city(
    request: Request,
    city: str,
    db: AsyncSession = Depends(get_db),
):
    return await VehicleService(db).search(None if city == "all" else city)


@router.get(
    "/provider",
    response_model=list[VehicleResponse],
    summary="List the caller's vehicles",
)
@limiter.limit(RATE_LIMIT)
async def provider_vehicles(
    request: Request,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await VehicleService(db).list_for_provider(principal)


@router.get(
    "/{vehicle_id}",
    response_model=VehicleResponse,
    summary="Get a vehicle",
)
@limiter.limit(RATE_LIMIT)
async def get_vehicle(
    request: Request,
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await VehicleService(db).get(vehicle_id)
