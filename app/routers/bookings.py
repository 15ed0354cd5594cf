from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_clock, get_current_user
from app.schemas.booking import BookingCreate, BookingResponse
from app.schemas.identity import CallerIdentity
from app.services import booking_service
from app.utils.clock import Clock
from app.utils.response import success_response

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _dump(booking) -> dict:
    return BookingResponse.model_validate(booking).model_dump()


@router.get("")
async def list_bookings(
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    bookings = await booking_service.list_bookings(db, caller)
    return success_response(data=[_dump(b) for b in bookings])


@router.post("", status_code=201)
async def create_booking(
    payload: BookingCreate,
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    booking = await booking_service.create_booking(
        db,
        caller,
        vehicle_id=payload.vehicle_id,
        start_at=payload.start_at,
        end_at=payload.end_at,
        purpose=payload.purpose,
        hire_type=payload.hire_type,
        clock=clock,
    )
    return success_response(data=_dump(booking))


@router.put("/{booking_id}/mark-hired")
async def mark_hired(
    booking_id: int,
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    booking = await booking_service.mark_hired(db, caller, booking_id, clock=clock)
    return success_response(data=_dump(booking))


@router.put("/{booking_id}/mark-returned")
async def mark_returned(
    booking_id: int,
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    booking = await booking_service.mark_returned(db, caller, booking_id, clock=clock)
    return success_response(data=_dump(booking))


@router.put("/{booking_id}/cancel")
async def cancel_booking(
    booking_id: int,
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.cancel_booking(db, caller, booking_id)
    return success_response(data=_dump(booking))
