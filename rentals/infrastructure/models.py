"""
SQLAlchemy ORM models.

Tables
------
* ``users``     -- providers and customers, with wallet balance
* ``vehicles``  -- rental listings owned by a provider
* ``bookings``  -- a customer's reservation of one vehicle
* ``reviews``   -- a customer's rating of one booking

Check constraints mirror the domain invariants (positive price,
non-negative wallet and booking totals, end after start).
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)

from .database import Base
from rentals.domain.enums import (
    BookingStatus,
    FuelType,
    PaymentStatus,
    UserRole,
    VehicleType,
)


def _utcnow():
    return datetime.now(timezone.utc)


def _values(enum_cls):
    return [member.value for member in enum_cls]


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(120), unique=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(Enum(UserRole, values_callable=_values), nullable=False)
    city = Column(String(120), nullable=False)
    wallet_balance = Column(Integer, default=0, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        CheckConstraint("wallet_balance >= 0", name="ck_users_wallet_non_negative"),
    )


class VehicleModel(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    provider_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    make = Column(String(80), nullable=False)
    model = Column(String(80), nullable=False)
    year = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)  # per day
    city = Column(String(120), nullable=False)
    available = Column(Boolean, default=True, nullable=False)
    image_url = Column(Text, nullable=False)
    type = Column(Enum(VehicleType, values_callable=_values), nullable=False)
    fuel_type = Column(Enum(FuelType, values_callable=_values), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_vehicles_price_positive"),
        Index("idx_vehicles_provider", "provider_id"),
        Index("idx_vehicles_city_available", "city", "available"),
    )


class BookingModel(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status = Column(
        Enum(BookingStatus, values_callable=_values),
        default=BookingStatus.PENDING,
        nullable=False,
    )
    total_amount = Column(Integer, nullable=False)
    payment_status = Column(
        Enum(PaymentStatus, values_callable=_values),
        default=PaymentStatus.PENDING,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_bookings_total_non_negative"),
        CheckConstraint("end_date > start_date", name="ck_bookings_range"),
        Index("idx_bookings_vehicle", "vehicle_id"),
        Index("idx_bookings_customer", "customer_id"),
        Index("idx_bookings_status", "status"),
    )


class ReviewModel(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, unique=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())

