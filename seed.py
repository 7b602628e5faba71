"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations (point DATABASE_URL at a persistent database first;
the default in-memory database is discarded when the script exits):
    python seed.py

Creates:
  - 3 providers and 4 customers (password: "password")
  - 10 vehicles across three cities
  - 4 bookings (PENDING, CONFIRMED, COMPLETED, CANCELLED) with one review
"""

import asyncio
from datetime import datetime, timedelta

from sqlalchemy import func, select

from rentals.config import settings
from rentals.domain.entities import Principal
from rentals.domain.enums import BookingStatus, FuelType, UserRole, VehicleType
from rentals.infrastructure.database import EntityStore
from rentals.infrastructure.models import UserModel
from rentals.services.bookings import BookingService
from rentals.services.reviews import ReviewService
from rentals.services.users import UserService
from rentals.services.vehicles import VehicleService

PROVIDERS = [
    {"username": "metro_rentals", "city": "Mumbai"},
    {"username": "hilltop_wheels", "city": "Pune"},
    {"username": "coastal_drive", "city": "Goa"},
]

CUSTOMERS = [
    {"username": "aarav", "city": "Mumbai"},
    {"username": "priya", "city": "Pune"},
    {"username": "rohan", "city": "Goa"},
    {"username": "sneha", "city": "Mumbai"},
]

VEHICLES = [
    # (provider index, make, model, year, price, city, type, fuel)
    (0, "Toyota", "Corolla", 2021, 50, "Mumbai", VehicleType.CAR, FuelType.PETROL),
    (0, "Hyundai", "Creta", 2022, 70, "Mumbai", VehicleType.SUV, FuelType.DIESEL),
    (0, "Tata", "Nexon EV", 2023, 65, "Mumbai", VehicleType.SUV, FuelType.ELECTRIC),
    (0, "Royal Enfield", "Classic 350", 2020, 20, "Mumbai", VehicleType.BIKE, FuelType.PETROL),
    (1, "Maruti", "Swift", 2019, 35, "Pune", VehicleType.CAR, FuelType.PETROL),
    (1, "Mahindra", "XUV700", 2023, 90, "Pune", VehicleType.SUV, FuelType.DIESEL),
    (1, "Ather", "450X", 2022, 15, "Pune", VehicleType.BIKE, FuelType.ELECTRIC),
    (2, "Honda", "City", 2021, 45, "Goa", VehicleType.CAR, FuelType.PETROL),
    (2, "Mahindra", "Thar", 2022, 80, "Goa", VehicleType.SUV, FuelType.DIESEL),
    (2, "Honda", "Activa", 2021, 10, "Goa", VehicleType.BIKE, FuelType.PETROL),
]


async def seed(store: EntityStore) -> None:
    async with store.session() as session:
        # Check if already seeded
        result = await session.execute(select(func.count()).select_from(UserModel))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        users = UserService(session)

        # ── Users ─────────────────────────────────────────────────────
        providers = []
        for p in PROVIDERS:
            user = await users.register(p["username"], "password", UserRole.PROVIDER, p["city"])
            user.is_verified = True
            providers.append(users.principal_for(user))
        customers = []
        for c in CUSTOMERS:
            user = await users.register(c["username"], "password", UserRole.CUSTOMER, c["city"])
            customers.append(users.principal_for(user))
        print(f"  Created {len(providers)} providers, {len(customers)} customers")

        # ── Vehicles ──────────────────────────────────────────────────
        vehicle_service = VehicleService(session)
        vehicles = []
        for idx, make, model, year, price, city, vtype, fuel in VEHICLES:
            vehicle = await vehicle_service.create(
                providers[idx],
                make=make,
                model=model,
                year=year,
                price=price,
                city=city,
                image_url=f"https://images.example.com/{make.lower()}-{model.lower().replace(' ', '-')}.jpg",
                type=vtype,
                fuel_type=fuel,
            )
            vehicles.append(vehicle)
        print(f"  Created {len(vehicles)} vehicles")

        # ── Bookings ──────────────────────────────────────────────────
        bookings = BookingService(session)
        start = datetime(2025, 1, 1)

        async def book(customer: Principal, vehicle_idx: int, days: int):
            return await bookings.create(
                customer, vehicles[vehicle_idx].id, start, start + timedelta(days=days)
            )

        await book(customers[0], 0, 2)  # stays PENDING

        confirmed = await book(customers[3], 1, 3)
        await bookings.update_status(providers[0], confirmed.id, BookingStatus.CONFIRMED)

        completed = await book(customers[1], 4, 5)
        await bookings.update_status(providers[1], completed.id, BookingStatus.CONFIRMED)
        await bookings.update_status(providers[1], completed.id, BookingStatus.COMPLETED)
        await ReviewService(session).create(customers[1], completed.id, 5, "Spotless car, easy pickup.")

        cancelled = await book(customers[2], 7, 1)
        await bookings.update_status(customers[2], cancelled.id, BookingStatus.CANCELLED)
        print("  Created 4 bookings and 1 review")

    print("\nSeed complete!")


async def main():
    print("Seeding database...")
    store = EntityStore(settings.database_url)
    if settings.create_schema_on_startup:
        await store.create_all()
    await seed(store)
    await store.dispose()


if __name__ == "__main__":
    asyncio.run(main())
