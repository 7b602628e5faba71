"""FastAPI dependency injection helpers."""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.domain.entities import Principal
from rentals.infrastructure.payments import PaymentProvider
from rentals.infrastructure.repositories import UserRepository
from rentals.services.users import UserService


async def get_db(request: Request) -> AsyncSession:  # type: ignore[misc]
    """Yield a unit of work from the app's store; commit on success, rollback on error."""
    async with request.app.state.store.session() as session:
        yield session


async def get_principal(
    x_user_id: Optional[int] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """Resolve the authenticated caller from the ``X-User-Id`` header."""
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    user = await UserRepository(db).get_by_id(x_user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return UserService.principal_for(user)


def get_payments(request: Request) -> PaymentProvider:
    return request.app.state.payments


def strict_transitions(request: Request) -> bool:
    return request.app.state.settings.strict_booking_transitions
