"""
Payment provider adapters.

The wallet ledger only needs two calls: create an intent for an amount and
confirm it.  ``MockPaymentProvider`` always succeeds and is the default
outside production; a real gateway plugs in behind the same protocol.
"""

from __future__ import annotations

from collections import OrderedDict
import logging
import time
import uuid
from typing import Protocol

from rentals.domain.errors import PaymentFailed

logger = logging.getLogger(__name__)


class PaymentProvider(Protocol):
    async def create_intent(self, amount: int) -> str: ...

    async def confirm(self, token: str) -> None: ...


class MockPaymentProvider:
    """
    Simulated gateway: every intent is created and confirmed.

    Only the newest ``max_pending`` unconfirmed intents are remembered;
    older ones are forgotten and can no longer be confirmed.
    """

    def __init__(self, currency: str = "usd", max_pending: int = 1024):
        self.currency = currency
        self.max_pending = max_pending
        self._issued: OrderedDict[str, int] = OrderedDict()

    async def create_intent(self, amount: int) -> str:
        token = f"mock_payment_intent_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"
        self._issued[token] = amount
        while len(self._issued) > self.max_pending:
            self._issued.popitem(last=False)
        logger.debug("Mock intent %s for %d %s", token, amount, self.currency)
        return token

    async def confirm(self, token: str) -> None:
        if token not in self._issued:
            raise PaymentFailed(f"Unknown payment intent: {token}")
        del self._issued[token]


def build_payment_provider(name: str, currency: str = "usd") -> PaymentProvider:
    if name == "mock":
        logger.warning("No payment gateway configured. Payments will be simulated.")
        return MockPaymentProvider(currency=currency)
    raise ValueError(f"Unsupported payment provider: {name}")
