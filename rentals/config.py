"""Centralised application settings loaded from environment / .env file."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///:memory:"
    echo_sql: bool = False
    create_schema_on_startup: bool = True  # production runs alembic instead

    # Booking lifecycle: opt in to reject writes off the state machine
    strict_booking_transitions: bool = False

    # Payments
    payment_provider: str = "mock"
    payment_currency: str = "usd"

    # API
    rate_limit: str = "100/minute"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
