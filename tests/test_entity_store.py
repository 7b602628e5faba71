"""Entity store primitives: sequential ids, criteria lists, patch updates, unit of work."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from rentals.domain.enums import UserRole, VehicleType
from rentals.infrastructure.database import EntityStore, _is_memory_url
from rentals.infrastructure.models import UserModel, VehicleModel
from rentals.infrastructure.repositories import UserRepository, VehicleRepository
from tests.factories import make_user, make_vehicle


class TestRepositoryPrimitives:
    @pytest.mark.asyncio
    async def test_ids_are_sequential_per_kind(self, db_session):
        provider = await make_user(db_session, "p", role=UserRole.PROVIDER)
        customer = await make_user(db_session, "c")
        v1 = await make_vehicle(db_session, provider)
        v2 = await make_vehicle(db_session, provider)

        assert (provider.id, customer.id) == (1, 2)
        assert (v1.id, v2.id) == (1, 2)

    @pytest.mark.asyncio
    async def test_get_unknown_returns_none(self, db_session):
        assert await UserRepository(db_session).get_by_id(7) is None

    @pytest.mark.asyncio
    async def test_update_applies_patch(self, db_session):
        user = await make_user(db_session, "c")
        repo = UserRepository(db_session)

        assert await repo.update(user.id, city="Pune", is_verified=True) is True
        await db_session.refresh(user)
        assert user.city == "Pune"
        assert user.is_verified is True

    @pytest.mark.asyncio
    async def test_update_unknown_returns_false(self, db_session):
        assert await UserRepository(db_session).update(99, city="Pune") is False

    @pytest.mark.asyncio
    async def test_list_with_criteria(self, db_session):
        provider = await make_user(db_session, "p", role=UserRole.PROVIDER)
        await make_vehicle(db_session, provider, type=VehicleType.BIKE)
        await make_vehicle(db_session, provider, type=VehicleType.SUV)
        await make_vehicle(db_session, provider, type=VehicleType.BIKE)

        bikes = await VehicleRepository(db_session).list(VehicleModel.type == VehicleType.BIKE)
        assert [v.id for v in bikes] == [1, 3]

    @pytest.mark.asyncio
    async def test_city_search_is_case_insensitive_substring(self, db_session):
        provider = await make_user(db_session, "p", role=UserRole.PROVIDER)
        await make_vehicle(db_session, provider, city="Navi Mumbai")
        await make_vehicle(db_session, provider, city="Pune")
        await make_vehicle(db_session, provider, city="Mumbai", available=False)
        repo = VehicleRepository(db_session)

        assert [v.city for v in await repo.get_available_in_city("mumbai")] == ["Navi Mumbai"]
        assert len(await repo.get_available_in_city(None)) == 2

    @pytest.mark.asyncio
    async def test_reserve_is_compare_and_swap(self, db_session):
        provider = await make_user(db_session, "p", role=UserRole.PROVIDER)
        vehicle = await make_vehicle(db_session, provider)
        repo = VehicleRepository(db_session)

        assert await repo.reserve(vehicle.id) is True
        assert await repo.reserve(vehicle.id) is False
        assert await repo.reserve(404) is False
        assert vehicle.available is False

    @pytest.mark.asyncio
    async def test_credit_wallet_unknown_user(self, db_session):
        assert await UserRepository(db_session).credit_wallet(5, 10) is None


class TestUnitOfWork:
    @pytest.mark.asyncio
    async def test_commit_on_success(self, store):
        async with store.session() as session:
            await make_user(session, "c")
        async with store.session() as session:
            assert await UserRepository(session).get_by_username("c") is not None

    @pytest.mark.asyncio
    async def test_rollback_on_error(self, store):
        with pytest.raises(RuntimeError):
            async with store.session() as session:
                await make_user(session, "c")
                raise RuntimeError("boom")
        async with store.session() as session:
            assert await UserRepository(session).list() == []

    @pytest.mark.asyncio
    async def test_stores_are_isolated(self, store):
        async with store.session() as session:
            await make_user(session, "c")

        other = EntityStore("sqlite+aiosqlite:///:memory:")
        await other.create_all()
        try:
            async with other.session() as session:
                assert await UserRepository(session).list() == []
        finally:
            await other.dispose()

    def test_memory_url_detection(self):
        assert _is_memory_url("sqlite+aiosqlite:///:memory:")
        assert _is_memory_url("sqlite+aiosqlite://")
        assert not _is_memory_url("sqlite+aiosqlite:///./rentals.db")
        assert not _is_memory_url("postgresql+asyncpg://u:p@localhost/rentals")

    @pytest.mark.asyncio
    async def test_wallet_check_constraint(self, store):
        with pytest.raises(IntegrityError):
            async with store.session() as session:
                user = await make_user(session, "c")
                await session.flush()
                await UserRepository(session).update(user.id, wallet_balance=-1)
        async with store.session() as session:
            assert await session.get(UserModel, 1) is None
