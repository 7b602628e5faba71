"""Vehicle listings owned by providers."""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from rentals.domain.entities import Principal
from rentals.domain.errors import NotFound, Unauthorized
from rentals.infrastructure.models import VehicleModel
from rentals.infrastructure.repositories import (
    BookingRepository,
    VehicleRepository,
)

logger = logging.getLogger(__name__)


class VehicleService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.vehicles = VehicleRepository(session)
        self.bookings = BookingRepository(session)

    async def create(self, caller: Principal, **data: Any) -> VehicleModel:
        if not caller.is_provider:
            raise Unauthorized("Only providers can create listings")
        vehicle = await self.vehicles.create(provider_id=caller.id, available=True, **data)
        logger.info("Vehicle %d listed by provider %d", vehicle.id, caller.id)
        return vehicle

    async def get(self, vehicle_id: int) -> VehicleModel:
        vehicle = await self.vehicles.get_by_id(vehicle_id)
        if vehicle is None:
            raise NotFound(f"Vehicle {vehicle_id} not found")
        return vehicle

    async def search(self, city: Optional[str]) -> list[VehicleModel]:
        """Available vehicles whose city contains *city* (any city if empty)."""
        vehicles = await self.vehicles.get_available_in_city(city)
        logger.debug("Found %d vehicles for city: %s", len(vehicles), city or "all")
        return vehicles

    async def list_for_provider(self, caller: Principal) -> list[VehicleModel]:
        if not caller.is_provider:
            raise Unauthorized("Only providers have listings")
        return await self.vehicles.get_by_provider(caller.id)

    async def dashboard_stats(self, caller: Principal) -> dict[str, dict[str, int]]:
        if not caller.is_provider:
            raise Unauthorized("Only providers have a dashboard")
        return {
            "bookings_by_status": await self.bookings.count_by_status(caller.id),
            "vehicles_by_type": await self.vehicles.count_by_type(caller.id),
        }
