"""
User endpoints
==============

POST /api/v1/users/register -- create a provider or customer account
POST /api/v1/users/login    -- verify credentials, return the account
GET  /api/v1/users/me       -- the authenticated caller
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.api.dependencies import get_db, get_principal
from rentals.api.middleware import RATE_LIMIT, limiter
from rentals.api.schemas import UserLoginRequest, UserRegisterRequest, UserResponse
from rentals.domain.entities import Principal
from rentals.services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "/register",
    status_code=201,
    response_model=UserResponse,
    summary="Register a new account",
)
@limiter.limit(RATE_LIMIT)
async def register(
    request: Request,
    body: UserRegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    return await UserService(db).register(
        username=body.username,
        password=body.password,
        role=body.role,
        city=body.city,
    )


@router.post("/login", response_model=UserResponse, summary="Log in")
@limiter.limit(RATE_LIMIT)
async def login(
    request: Request,
    body: UserLoginRequest,
    db: AsyncSession = Depends(get_db),
):
    return await UserService(db).authenticate(body.username, body.password)


@router.get("/me", response_model=UserResponse, summary="Current user")
@limiter.limit(RATE_LIMIT)
async def me(
    request: Request,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await UserService(db).get(principal.id)
