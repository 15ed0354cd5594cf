from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.booking import Booking, BookingStatus
from app.models.vehicle import Vehicle, VehicleStatus
from app.schemas.booking import BookingHistoryItem, VehicleDetailResponse
from app.schemas.vehicle import VehicleResponse
from app.utils.exceptions import VehicleNotFoundError
from app.utils.response import success_response

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

RECENT_BOOKINGS_LIMIT = 5


@router.get("")
async def get_vehicles(
    brand: str | None = None,
    status: VehicleStatus | None = None,
    available: bool = False,
    db: AsyncSession = Depends(get_db),
):
    stmt = select(Vehicle).order_by(Vehicle.created_at.desc(), Vehicle.id.desc())
    if brand:
        stmt = stmt.where(Vehicle.brand.ilike(f"%{brand}%"))
    if available:
        status = VehicleStatus.AVAILABLE
    if status is not None:
        stmt = stmt.where(Vehicle.status == status)

    result = await db.execute(stmt)
    vehicles = result.scalars().all()
    data = [VehicleResponse.model_validate(v).model_dump() for v in vehicles]
    return success_response(data=data)


@router.get("/{vehicle_id}")
async def get_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    vehicle = await db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise VehicleNotFoundError()

    result = await db.execute(
        select(Booking)
        .where(
            Booking.vehicle_id == vehicle_id,
            Booking.status.in_([BookingStatus.CONFIRMED, BookingStatus.COMPLETED]),
        )
        .order_by(Booking.start_at.desc())
        .limit(RECENT_BOOKINGS_LIMIT)
    )
    recent = result.scalars().all()

    data = VehicleDetailResponse(
        **VehicleResponse.model_validate(vehicle).model_dump(),
        recent_bookings=[BookingHistoryItem.model_validate(b) for b in recent],
    ).model_dump()
    return success_response(data=data)
