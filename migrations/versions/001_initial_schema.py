"""Initial schema: users, vehicles, bookings, reviews.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # ── users ─────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(120), unique=True, nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column(
            "role",
            sa.Enum("provider", "customer", name="userrole"),
            nullable=False,
        ),
        sa.Column("city", sa.String(120), nullable=False),
        sa.Column("wallet_balance", sa.Integer, default=0, nullable=False),
        sa.Column("is_verified", sa.Boolean, default=False, nullable=False),
        sa.CheckConstraint("wallet_balance >= 0", name="ck_users_wallet_non_negative"),
    )

    # ── vehicles ──────────────────────────────────────────────────────
    op.create_table(
        "vehicles",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "provider_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column("make", sa.String(80), nullable=False),
        sa.Column("model", sa.String(80), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("price", sa.Integer, nullable=False),
        sa.Column("city", sa.String(120), nullable=False),
        sa.Column("available", sa.Boolean, default=True, nullable=False),
        sa.Column("image_url", sa.Text, nullable=False),
        sa.Column(
            "type", sa.Enum("car", "suv", "bike", name="vehicletype"), nullable=False
        ),
        sa.Column(
            "fuel_type",
            sa.Enum("petrol", "diesel", "electric", name="fueltype"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("price > 0", name="ck_vehicles_price_positive"),
    )
    op.create_index("idx_vehicles_provider", "vehicles", ["provider_id"])
    op.create_index("idx_vehicles_city_available", "vehicles", ["city", "available"])

    # ── bookings ──────────────────────────────────────────────────────
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "vehicle_id", sa.Integer, sa.ForeignKey("vehicles.id"), nullable=False
        ),
        sa.Column(
            "customer_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column("start_date", sa.DateTime, nullable=False),
        sa.Column("end_date", sa.DateTime, nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "pending",
                "confirmed",
                "completed",
                "cancelled",
                name="bookingstatus",
            ),
            default="pending",
            nullable=False,
        ),
        sa.Column("total_amount", sa.Integer, nullable=False),
        sa.Column(
            "payment_status",
            sa.Enum("pending", "completed", "refunded", name="paymentstatus"),
            default="pending",
            nullable=False,
        ),
        sa.CheckConstraint("total_amount >= 0", name="ck_bookings_total_non_negative"),
        sa.CheckConstraint("end_date > start_date", name="ck_bookings_range"),
    )
    op.create_index("idx_bookings_vehicle", "bookings", ["vehicle_id"])
    op.create_index("idx_bookings_customer", "bookings", ["customer_id"])
    op.create_index("idx_bookings_status", "bookings", ["status"])

    # ── reviews ───────────────────────────────────────────────────────
    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "booking_id", sa.Integer, sa.ForeignKey("bookings.id"), nullable=False
        ),
        sa.UniqueConstraint("booking_id", name="uq_reviews_booking"),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("comment", sa.Text, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    op.drop_table("reviews")
    op.drop_table("bookings")
    op.drop_table("vehicles")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS paymentstatus")
    op.execute("DROP TYPE IF EXISTS bookingstatus")
    op.execute("DROP TYPE IF EXISTS fueltype")
    op.execute("DROP TYPE IF EXISTS vehicletype")
    op.execute("DROP TYPE IF EXISTS userrole")
