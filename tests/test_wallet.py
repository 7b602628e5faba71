"""Wallet ledger tests (mock payment provider and AsyncMock doubles)."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from rentals.domain.errors import InvalidAmount, NotFound, PaymentFailed
from rentals.infrastructure.payments import MockPaymentProvider, build_payment_provider
from rentals.services.wallet import WalletService
from tests.factories import make_user


class TestTopUp:
    @pytest.mark.asyncio
    async def test_credits_balance(self, db_session):
        user = await make_user(db_session, "alice", wallet_balance=10)
        service = WalletService(db_session, MockPaymentProvider())

        assert await service.top_up(user.id, 25) == 35
        assert await service.top_up(user.id, 5) == 40
        assert user.wallet_balance == 40

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [-5, 0])
    async def test_non_positive_amount_rejected(self, db_session, amount):
        user = await make_user(db_session, "alice", wallet_balance=10)
        payments = AsyncMock()
        service = WalletService(db_session, payments)

        with pytest.raises(InvalidAmount):
            await service.top_up(user.id, amount)

        await db_session.refresh(user)
        assert user.wallet_balance == 10
        payments.create_intent.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session):
        with pytest.raises(NotFound):
            await WalletService(db_session, MockPaymentProvider()).top_up(99, 10)

    @pytest.mark.asyncio
    async def test_payment_failure_leaves_balance(self, db_session):
        user = await make_user(db_session, "alice")
        payments = AsyncMock()
        payments.create_intent = AsyncMock(return_value="tok_1")
        payments.confirm = AsyncMock(side_effect=PaymentFailed("card declined"))

        with pytest.raises(PaymentFailed):
            await WalletService(db_session, payments).top_up(user.id, 50)

        await db_session.refresh(user)
        assert user.wallet_balance == 0
        payments.confirm.assert_awaited_once_with("tok_1")


class TestPaymentIntent:
    @pytest.mark.asyncio
    async def test_returns_mock_token(self, db_session):
        token = await WalletService(db_session, MockPaymentProvider()).create_payment_intent(20)
        assert token.startswith("mock_payment_intent_")

    @pytest.mark.asyncio
    async def test_rejects_non_positive(self, db_session):
        with pytest.raises(InvalidAmount):
            await WalletService(db_session, MockPaymentProvider()).create_payment_intent(0)


class TestMockPaymentProvider:
    @pytest.mark.asyncio
    async def test_confirm_issued_token(self):
        provider = MockPaymentProvider()
        token = await provider.create_intent(10)
        await provider.confirm(token)

    @pytest.mark.asyncio
    async def test_confirm_unknown_token_fails(self):
        with pytest.raises(PaymentFailed):
            await MockPaymentProvider().confirm("forged")

    @pytest.mark.asyncio
    async def test_unconfirmed_intents_are_bounded(self):
        provider = MockPaymentProvider(max_pending=2)
        oldest = await provider.create_intent(10)
        await provider.create_intent(20)
        newest = await provider.create_intent(30)

        assert len(provider._issued) == 2
        with pytest.raises(PaymentFailed):
            await provider.confirm(oldest)
        await provider.confirm(newest)

    def test_unknown_provider_name(self):
        with pytest.raises(ValueError):
            build_payment_provider("carrier-pigeon")
