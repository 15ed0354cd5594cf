from app.models.vehicle import Vehicle, VehicleStatus
from app.models.booking import Booking, BookingStatus, BookingPurpose, HireType
from app.models.user import User, Role

__all__ = [
    "Vehicle", "VehicleStatus",
    "Booking", "BookingStatus", "BookingPurpose", "HireType",
    "User", "Role",
]
