from decimal import Decimal

from pydantic import BaseModel

from app.models.vehicle import VehicleStatus


class VehicleResponse(BaseModel):
    id: int
    brand: str
    model: str | None = None
    plate: str
    daily_rate: Decimal
    seats: int
    status: VehicleStatus

    model_config = {"from_attributes": True}
