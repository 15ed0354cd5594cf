from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import Role, User
from app.models.vehicle import Vehicle, VehicleStatus


def normalize_plate(plate: str) -> str:
    return " ".join(plate.upper().split())


SEED_ADMIN = {"id": 1, "name": "Fleet Admin", "email": "admin@example.com", "role": Role.ADMIN}
SEED_USERS = [
    {"id": 2, "name": "Jane Customer", "email": "user@example.com", "role": Role.USER},
    {"id": 3, "name": "Sam Customer", "email": "sam@example.com", "role": Role.USER},
]

SEED_VEHICLES = [
    {"id": 1, "brand": "Toyota", "model": "Land Cruiser", "plate": "uba  123a", "daily_rate": Decimal("200000"), "seats": 7},
    {"id": 2, "brand": "Toyota", "model": "Premio", "plate": "UBB 456B", "daily_rate": Decimal("240000"), "seats": 5},
    {"id": 3, "brand": "Nissan", "model": "X-Trail", "plate": "UG 32 00123", "daily_rate": Decimal("100000"), "seats": 5},
    {"id": 4, "brand": "Mercedes-Benz", "model": None, "plate": "UAX 789C", "daily_rate": Decimal("500000"), "seats": 4,
     "status": VehicleStatus.UNAVAILABLE},
]


async def seed_data(session: AsyncSession) -> None:
    result = await session.execute(select(Vehicle).limit(1))
    if result.scalars().first() is not None:
        return

    for u in [SEED_ADMIN, *SEED_USERS]:
        session.add(User(**u))

    for v in SEED_VEHICLES:
        session.add(Vehicle(**{**v, "plate": normalize_plate(v["plate"])}))

    await session.commit()
