"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from rentals.domain.enums import (
    BookingStatus,
    FuelType,
    PaymentStatus,
    UserRole,
    VehicleType,
)


# ── Requests ──────────────────────────────────────────────────────────


class UserRegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=120)
    password: str = Field(..., min_length=1, max_length=72)
    role: UserRole
    city: str = Field(..., min_length=1, max_length=120)


class UserLoginRequest(BaseModel):
    username: str
    password: str = Field(..., max_length=72)


class VehicleCreateRequest(BaseModel):
    make: str = Field(..., min_length=1, max_length=80)
    model: str = Field(..., min_length=1, max_length=80)
    year: int = Field(..., ge=1900, le=2100)
    price: int = Field(..., gt=0, description="Daily rental price.")
    city: str = Field(..., min_length=1, max_length=120)
    image_url: str
    type: VehicleType
    fuel_type: FuelType


class BookingCreateRequest(BaseModel):
    vehicle_id: int
    start_date: datetime
    end_date: datetime


class BookingStatusUpdateRequest(BaseModel):
    status: BookingStatus


class AmountRequest(BaseModel):
    # Non-positive amounts are rejected by the wallet ledger, not here,
    # so they surface as InvalidAmount.
    amount: int


class ReviewCreateRequest(BaseModel):
    booking_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


# ── Responses ─────────────────────────────────────────────────────────


class UserResponse(BaseModel):
    id: int
    username: str
    role: UserRole
    city: str
    wallet_balance: int
    is_verified: bool

    model_config = {"from_attributes": True}


class VehicleResponse(BaseModel):
    id: int
    provider_id: int
    make: str
    model: str
    year: int
    price: int
    city: str
    available: bool
    image_url: str
    type: VehicleType
    fuel_type: FuelType
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BookingResponse(BaseModel):
    id: int
    vehicle_id: int
    customer_id: int
    start_date: datetime
    end_date: datetime
    status: BookingStatus
    total_amount: int
    payment_status: PaymentStatus

    model_config = {"from_attributes": True}


class ReviewResponse(BaseModel):
    id: int
    booking_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PaymentIntentResponse(BaseModel):
    client_secret: str


class WalletBalanceResponse(BaseModel):
    success: bool = True
    wallet_balance: int


class DashboardStatsResponse(BaseModel):
    bookings_by_status: dict[str, int] = {}
    vehicles_by_type: dict[str, int] = {}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
