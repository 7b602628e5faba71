"""Registration, login and principal resolution."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from rentals.domain.entities import Principal
from rentals.domain.enums import UserRole
from rentals.domain.errors import DuplicateUsername, InvalidCredentials, NotFound
from rentals.infrastructure.models import UserModel
from rentals.infrastructure.passwords import hash_password, verify_password
from rentals.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = UserRepository(session)

    async def register(
        self, username: str, password: str, role: UserRole, city: str
    ) -> UserModel:
        if await self.users.get_by_username(username) is not None:
            raise DuplicateUsername("Username already exists")
        user = await self.users.create(
            username=username,
            password=hash_password(password),
            role=UserRole(role),
            city=city,
            wallet_balance=0,
            is_verified=False,
        )
        logger.info("Registered %s %d (%s)", user.role.value, user.id, username)
        return user

    async def authenticate(self, username: str, password: str) -> UserModel:
        user = await self.users.get_by_username(username)
        if user is None or not verify_password(password, user.password):
            raise InvalidCredentials("Invalid username or password")
        return user

    async def get(self, user_id: int) -> UserModel:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        return user

    @staticmethod
    def principal_for(user: UserModel) -> Principal:
        return Principal(id=user.id, role=UserRole(user.role))
