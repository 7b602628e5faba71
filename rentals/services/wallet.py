"""
Wallet ledger.

The balance is additive only: a top-up is confirmed with the payment
provider and then credited with a single atomic UPDATE.  Booking costs are
recorded on the booking and are never debited from the wallet.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from rentals.domain.errors import InvalidAmount, NotFound
from rentals.infrastructure.payments import PaymentProvider
from rentals.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


def _validate_amount(amount: int) -> None:
    if amount is None or amount <= 0:
        raise InvalidAmount("Invalid amount")


class WalletService:
    def __init__(self, session: AsyncSession, payments: PaymentProvider):
        self.session = session
        self.payments = payments
        self.users = UserRepository(session)

    async def create_payment_intent(self, amount: int) -> str:
        _validate_amount(amount)
        return await self.payments.create_intent(amount)

    async def top_up(self, user_id: int, amount: int) -> int:
        """Credit *amount* to the user's wallet and return the new balance."""
        _validate_amount(amount)
        if await self.users.get_by_id(user_id) is None:
            raise NotFound(f"User {user_id} not found")

        token = await self.payments.create_intent(amount)
        await self.payments.confirm(token)

        balance = await self.users.credit_wallet(user_id, amount)
        if balance is None:
            raise NotFound(f"User {user_id} not found")
        logger.info("Wallet top-up: user=%d amount=%d balance=%d", user_id, amount, balance)
        return balance
