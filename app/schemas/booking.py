from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel

from app.models.booking import BookingPurpose, BookingStatus, HireType
from app.schemas.vehicle import VehicleResponse
from app.utils.time_range import as_utc

UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class BookingCreate(BaseModel):
    vehicle_id: int
    start_at: datetime
    end_at: datetime
    purpose: BookingPurpose
    hire_type: HireType


class UserSummary(BaseModel):
    id: int
    name: str | None = None
    email: str | None = None

    model_config = {"from_attributes": True}


class BookingResponse(BaseModel):
    id: int
    user_id: int
    vehicle_id: int
    start_at: UTCDateTime
    end_at: UTCDateTime
    purpose: BookingPurpose
    hire_type: HireType
    status: BookingStatus
    hired_at: UTCDateTime | None = None
    returned_at: UTCDateTime | None = None
    total_cost: Decimal | None = None
    created_at: UTCDateTime | None = None
    vehicle: VehicleResponse | None = None
    user: UserSummary | None = None

    model_config = {"from_attributes": True}


class BookingHistoryItem(BaseModel):
    id: int
    start_at: UTCDateTime
    end_at: UTCDateTime
    status: BookingStatus
    hire_type: HireType

    model_config = {"from_attributes": True}


class VehicleDetailResponse(VehicleResponse):
    recent_bookings: list[BookingHistoryItem] = []
