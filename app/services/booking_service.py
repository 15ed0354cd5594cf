"""Booking lifecycle: reservation, hand-off, return and cancellation.

A booking moves CONFIRMED -> COMPLETED (hired, then returned) or
CONFIRMED -> CANCELLED. COMPLETED and CANCELLED are terminal. Hand-off and
return update the booking and its vehicle in the same transaction, so a
vehicle is HIRED exactly while one of its bookings is hired and not returned.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.booking import Booking, BookingPurpose, BookingStatus, HireType
from app.models.user import User
from app.models.vehicle import Vehicle, VehicleStatus
from app.schemas.identity import CallerIdentity
from app.services import access_policy
from app.services.availability import is_available
from app.services.pricing import compute_cost
from app.services.vehicle_locks import vehicle_lock
from app.utils.clock import Clock, system_clock
from app.utils.exceptions import (
    BookingConflictError,
    BookingNotFoundError,
    ForbiddenError,
    InvalidTransitionError,
    PastStartError,
    VehicleNotFoundError,
    VehicleUnavailableError,
)
from app.utils.time_range import TimeRange

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _vehicle_transaction(db: AsyncSession, vehicle_id: int):
    """Serialize work on one vehicle and roll back everything on failure."""
    async with vehicle_lock(vehicle_id):
        try:
            yield
        except Exception:
            await db.rollback()
            raise


async def _locked_vehicle(db: AsyncSession, vehicle_id: int) -> Vehicle | None:
    return await db.get(Vehicle, vehicle_id, with_for_update=True, populate_existing=True)


async def _sync_user(db: AsyncSession, caller: CallerIdentity) -> User:
    """Keep the local user row in step with the identity the gateway forwarded."""
    user = await db.get(User, caller.id)
    if user is None:
        user = User(id=caller.id, name=caller.email, email=caller.email, role=caller.role)
        db.add(user)
        logger.info("Recorded user %s from caller identity", caller.id)
    else:
        if caller.email and user.email != caller.email:
            user.email = caller.email
        if user.role != caller.role:
            user.role = caller.role
    return user


async def _booking_or_404(db: AsyncSession, booking_id: int, for_update: bool = False) -> Booking:
    booking = await db.get(Booking, booking_id, with_for_update=for_update, populate_existing=True)
    if booking is None:
        raise BookingNotFoundError()
    return booking


async def load_booking(db: AsyncSession, booking_id: int) -> Booking:
    """Booking with its vehicle and user attached for display."""
    result = await db.execute(
        select(Booking)
        .where(Booking.id == booking_id)
        .options(selectinload(Booking.vehicle), selectinload(Booking.user))
        .execution_options(populate_existing=True)
    )
    booking = result.scalars().first()
    if booking is None:
        raise BookingNotFoundError()
    return booking


async def list_bookings(db: AsyncSession, caller: CallerIdentity) -> list[Booking]:
    stmt = (
        select(Booking)
        .options(selectinload(Booking.vehicle), selectinload(Booking.user))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    if not access_policy.is_admin(caller.role):
        stmt = stmt.where(Booking.user_id == caller.id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_booking(
    db: AsyncSession,
    caller: CallerIdentity,
    vehicle_id: int,
    start_at: datetime,
    end_at: datetime,
    purpose: BookingPurpose,
    hire_type: HireType,
    clock: Clock = system_clock,
) -> Booking:
    time_range = TimeRange(start_at, end_at)
    now = clock.now()
    if time_range.start <= now:
        raise PastStartError()

    if await db.get(Vehicle, vehicle_id) is None:
        raise VehicleNotFoundError()

    async with _vehicle_transaction(db, vehicle_id):
        vehicle = await _locked_vehicle(db, vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError()
        if vehicle.status != VehicleStatus.AVAILABLE:
            raise VehicleUnavailableError()

        if not await is_available(db, vehicle_id, time_range):
            logger.warning(
                "Booking conflict: vehicle=%s range=%s..%s user=%s",
                vehicle_id, time_range.start.isoformat(), time_range.end.isoformat(), caller.id,
            )
            raise BookingConflictError()

        await _sync_user(db, caller)
        booking = Booking(
            user_id=caller.id,
            vehicle_id=vehicle_id,
            start_at=time_range.start,
            end_at=time_range.end,
            purpose=purpose,
            hire_type=hire_type,
            status=BookingStatus.CONFIRMED,
            total_cost=compute_cost(time_range, vehicle.daily_rate, hire_type),
            created_at=now,
        )
        db.add(booking)
        await db.commit()

    logger.info(
        "Booking %s created: vehicle=%s user=%s cost=%s",
        booking.id, vehicle_id, caller.id, booking.total_cost,
    )
    return await load_booking(db, booking.id)


async def mark_hired(
    db: AsyncSession,
    caller: CallerIdentity,
    booking_id: int,
    clock: Clock = system_clock,
) -> Booking:
    """Hand the vehicle over. A booking that is already hired is rejected, not re-applied."""
    if not access_policy.is_admin(caller.role):
        raise ForbiddenError("Admin access required")

    booking = await _booking_or_404(db, booking_id)

    async with _vehicle_transaction(db, booking.vehicle_id):
        booking = await _booking_or_404(db, booking_id, for_update=True)
        if booking.status != BookingStatus.CONFIRMED:
            raise InvalidTransitionError(f"Cannot hire a {booking.status.value} booking")
        if booking.hired_at is not None:
            raise InvalidTransitionError("Booking is already hired")

        vehicle = await _locked_vehicle(db, booking.vehicle_id)
        if vehicle.status != VehicleStatus.AVAILABLE:
            raise VehicleUnavailableError()

        booking.hired_at = clock.now()
        vehicle.status = VehicleStatus.HIRED
        await db.commit()

    logger.info("Booking %s hired: vehicle %s now HIRED (by %s)", booking_id, booking.vehicle_id, caller.id)
    return await load_booking(db, booking_id)


async def mark_returned(
    db: AsyncSession,
    caller: CallerIdentity,
    booking_id: int,
    clock: Clock = system_clock,
) -> Booking:
    if not access_policy.is_admin(caller.role):
        raise ForbiddenError("Admin access required")

    booking = await _booking_or_404(db, booking_id)

    async with _vehicle_transaction(db, booking.vehicle_id):
        booking = await _booking_or_404(db, booking_id, for_update=True)
        if booking.status != BookingStatus.CONFIRMED:
            raise InvalidTransitionError(f"Cannot return a {booking.status.value} booking")
        if not booking.is_hired:
            raise InvalidTransitionError("Booking has not been hired")

        vehicle = await _locked_vehicle(db, booking.vehicle_id)

        booking.returned_at = clock.now()
        booking.status = BookingStatus.COMPLETED
        vehicle.status = VehicleStatus.AVAILABLE
        await db.commit()

    logger.info("Booking %s returned: vehicle %s now AVAILABLE (by %s)", booking_id, booking.vehicle_id, caller.id)
    return await load_booking(db, booking_id)


async def cancel_booking(db: AsyncSession, caller: CallerIdentity, booking_id: int) -> Booking:
    booking = await _booking_or_404(db, booking_id)
    if not access_policy.is_owner_or_admin(caller.id, caller.role, booking.user_id):
        raise ForbiddenError()

    async with _vehicle_transaction(db, booking.vehicle_id):
        booking = await _booking_or_404(db, booking_id, for_update=True)
        if booking.status != BookingStatus.CONFIRMED:
            raise InvalidTransitionError("Booking cannot be cancelled")
        if booking.is_hired:
            raise InvalidTransitionError("Booking is already hired and cannot be cancelled")

        booking.status = BookingStatus.CANCELLED
        await db.commit()

    logger.info("Booking %s cancelled by %s", booking_id, caller.id)
    return await load_booking(db, booking_id)
