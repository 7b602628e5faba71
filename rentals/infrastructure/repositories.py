"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes the
generic entity-table primitives (``create`` / ``get_by_id`` / ``list`` /
``update``) plus the domain-relevant queries for its kind.  There is no
delete: entities are never physically removed.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import BookingModel, ReviewModel, UserModel, VehicleModel

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    model: type

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **data: Any) -> ModelT:
        obj = self.model(**data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        return await self.session.get(self.model, entity_id)

    async def list(self, *criteria, order_by=None) -> list[ModelT]:
        query = select(self.model).where(*criteria)
        query = query.order_by(order_by if order_by is not None else self.model.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update(self, entity_id: int, **patch: Any) -> bool:
        """Apply *patch* to one row.  Returns False if the id is unknown."""
        result = await self.session.execute(
            update(self.model).where(self.model.id == entity_id).values(**patch)
        )
        return result.rowcount > 0


class UserRepository(Repository[UserModel]):
    model = UserModel

    async def get_by_username(self, username: str) -> Optional[UserModel]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        return result.scalar_one_or_none()

    async def credit_wallet(self, user_id: int, amount: int) -> Optional[int]:
        """Atomically add *amount* to the balance; returns the new balance."""
        result = await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(wallet_balance=UserModel.wallet_balance + amount)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        user = await self.session.get(UserModel, user_id, populate_existing=True)
        return user.wallet_balance


class VehicleRepository(Repository[VehicleModel]):
    model = VehicleModel

    async def get_available_in_city(self, city: str | None) -> list[VehicleModel]:
        criteria = [VehicleModel.available.is_(True)]
        if city:
            criteria.append(
                func.lower(VehicleModel.city).contains(city.lower(), autoescape=True)
            )
        return await self.list(*criteria)

    async def get_by_provider(self, provider_id: int) -> list[VehicleModel]:
        return await self.list(VehicleModel.provider_id == provider_id)

    async def reserve(self, vehicle_id: int) -> bool:
        """
        Compare-and-swap the availability flag from true to false.

        Returns False when the vehicle is unknown or already reserved.
        """
        result = await self.session.execute(
            update(VehicleModel)
            .where(VehicleModel.id == vehicle_id)
            .where(VehicleModel.available.is_(True))
            .values(available=False)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1

    async def release(self, vehicle_id: int) -> bool:
        return await self.update(vehicle_id, available=True)

    async def count_by_type(self, provider_id: int) -> dict[str, int]:
        result = await self.session.execute(
            select(VehicleModel.type, func.count())
            .where(VehicleModel.provider_id == provider_id)
            .group_by(VehicleModel.type)
        )
        return {_value(t): n for t, n in result.all()}


class BookingRepository(Repository[BookingModel]):
    model = BookingModel

    async def get_by_customer(self, customer_id: int) -> list[BookingModel]:
        return await self.list(BookingModel.customer_id == customer_id)

    async def get_by_provider(self, provider_id: int) -> list[BookingModel]:
        result = await self.session.execute(
            select(BookingModel)
            .join(VehicleModel, VehicleModel.id == BookingModel.vehicle_id)
            .where(VehicleModel.provider_id == provider_id)
            .order_by(BookingModel.id)
        )
        return list(result.scalars().all())

    async def get_by_vehicle(self, vehicle_id: int) -> list[BookingModel]:
        return await self.list(BookingModel.vehicle_id == vehicle_id)

    async def count_by_status(self, provider_id: int) -> dict[str, int]:
        result = await self.session.execute(
            select(BookingModel.status, func.count())
            .join(VehicleModel, VehicleModel.id == BookingModel.vehicle_id)
            .where(VehicleModel.provider_id == provider_id)
            .group_by(BookingModel.status)
        )
        return {_value(s): n for s, n in result.all()}


class ReviewRepository(Repository[ReviewModel]):
    model = ReviewModel

    async def get_by_booking(self, booking_id: int) -> Optional[ReviewModel]:
        result = await self.session.execute(
            select(ReviewModel).where(ReviewModel.booking_id == booking_id)
        )
        return result.scalar_one_or_none()

    async def get_for_vehicle(self, vehicle_id: int) -> list[ReviewModel]:
        result = await self.session.execute(
            select(ReviewModel)
            .join(BookingModel, BookingModel.id == ReviewModel.booking_id)
            .where(BookingModel.vehicle_id == vehicle_id)
            .order_by(ReviewModel.id)
        )
        return list(result.scalars().all())


def _value(member) -> str:
    return member.value if hasattr(member, "value") else member
