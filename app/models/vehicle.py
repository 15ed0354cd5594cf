import enum

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, Integer, Numeric, String, func
from sqlalchemy.orm import relationship

from app.database import Base


class VehicleStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    HIRED = "HIRED"
    UNAVAILABLE = "UNAVAILABLE"


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True)
    brand = Column(String, nullable=False)
    model = Column(String, nullable=True)
    plate = Column(String, nullable=False, unique=True)
    daily_rate = Column(Numeric(12, 2), nullable=False)
    seats = Column(Integer, nullable=False)
    status = Column(
        Enum(VehicleStatus, native_enum=False, length=20),
        nullable=False,
        default=VehicleStatus.AVAILABLE,
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    bookings = relationship("Booking", back_populates="vehicle")

    __table_args__ = (
        CheckConstraint("daily_rate > 0", name="check_vehicle_daily_rate_positive"),
        CheckConstraint("seats > 0", name="check_vehicle_seats_positive"),
    )
