import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.booking import Booking, BookingStatus
from app.utils.time_range import TimeRange

logger = logging.getLogger(__name__)


async def find_conflicts(
    db: AsyncSession,
    vehicle_id: int,
    time_range: TimeRange,
    exclude_booking_id: int | None = None,
) -> list[Booking]:
    """CONFIRMED bookings on the vehicle whose range overlaps ``time_range``."""
    stmt = select(Booking).where(
        Booking.vehicle_id == vehicle_id,
        Booking.status == BookingStatus.CONFIRMED,
        Booking.end_at > time_range.start,
        Booking.start_at < time_range.end,
    )
    if exclude_booking_id is not None:
        stmt = stmt.where(Booking.id != exclude_booking_id)

    result = await db.execute(stmt)
    candidates = result.scalars().all()
    return [b for b in candidates if time_range.overlaps(b.time_range)]


async def is_available(
    db: AsyncSession,
    vehicle_id: int,
    time_range: TimeRange,
    exclude_booking_id: int | None = None,
) -> bool:
    conflicts = await find_conflicts(db, vehicle_id, time_range, exclude_booking_id)
    if conflicts:
        logger.debug(
            "Vehicle %s blocked for %s - %s by bookings %s",
            vehicle_id, time_range.start, time_range.end, [b.id for b in conflicts],
        )
    return not conflicts
