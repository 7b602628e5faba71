"""
Wallet endpoints
================

POST /api/v1/wallet/create-payment-intent -- obtain a payment client token
POST /api/v1/wallet/topup                 -- confirm payment and credit the wallet
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.api.dependencies import get_db, get_payments, get_principal
from rentals.api.middleware import RATE_LIMIT, limiter
from rentals.api.schemas import (
    AmountRequest,
    ErrorResponse,
    PaymentIntentResponse,
    WalletBalanceResponse,
)
from rentals.domain.entities import Principal
from rentals.infrastructure.payments import PaymentProvider
from rentals.services.wallet import WalletService

router = APIRouter(prefix="/wallet", tags=["wallet"])


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    summary="Create a payment intent",
)
@limiter.limit(RATE_LIMIT)
async def create_payment_intent(
    request: Request,
    body: AmountRequest,
    principal: Principal = Depends(get_principal),
    payments: PaymentProvider = Depends(get_payments),
    db: AsyncSession = Depends(get_db),
):
    token = await WalletService(db, payments).create_payment_intent(body.amount)
    return PaymentIntentResponse(client_secret=token)


@router.post(
    "/topup",
    response_model=WalletBalanceResponse,
    summary="Top up the caller's wallet",
    responses={
        400: {"model": ErrorResponse, "description": "Amount is not positive."},
        502: {"model": ErrorResponse, "description": "Payment provider failed."},
    },
)
@limiter.limit(RATE_LIMIT)
async def top_up(
    request: Request,
    body: AmountRequest,
    principal: Principal = Depends(get_principal),
    payments: PaymentProvider = Depends(get_payments),
    db: AsyncSession = Depends(get_db),
):
    balance = await WalletService(db, payments).top_up(principal.id, body.amount)
    return WalletBalanceResponse(wallet_balance=balance)
