"""
FastAPI application factory.

* Registers routes for users, vehicles, bookings, wallet, reviews,
  the provider dashboard and admin.
* Builds the entity store and payment provider; creates the schema and
  disposes the engine via lifespan events.
* Maps domain errors onto HTTP status codes.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from rentals.api.middleware import limiter
from rentals.api.routes import admin, bookings, dashboard, reviews, users, vehicles, wallet
from rentals.config import Settings, settings as default_settings
from rentals.domain.errors import RentalError
from rentals.infrastructure.database import EntityStore
from rentals.infrastructure.payments import PaymentProvider, build_payment_provider

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup; release the engine on shutdown."""
    if app.state.settings.create_schema_on_startup:
        await app.state.store.create_all()
    yield
    await app.state.store.dispose()


async def rental_error_handler(request: Request, exc: RentalError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info(
            "%s %s rejected (%d): %s",
            request.method, request.url.path, exc.status_code, exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[EntityStore] = None,
    payments: Optional[PaymentProvider] = None,
) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="Vehicle Rental Marketplace API",
        description=(
            "Customers browse and book vehicles, providers list vehicles and "
            "manage bookings, and a wallet records payment top-ups."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store or EntityStore(settings.database_url, echo=settings.echo_sql)
    app.state.payments = payments or build_payment_provider(
        settings.payment_provider, currency=settings.payment_currency
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(RentalError, rental_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Routers
    for module in (users, vehicles, bookings, wallet, reviews, dashboard, admin):
        app.include_router(module.router, prefix="/api/v1")

    return app
