import enum

from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Index, Integer, Numeric, func
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.time_range import TimeRange


class BookingStatus(str, enum.Enum):
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class BookingPurpose(str, enum.Enum):
    SELF_DRIVE = "SELF_DRIVE"
    VIP = "VIP"
    ESCORT = "ESCORT"
    FUNCTION = "FUNCTION"
    AIRPORT_TRANSFER = "AIRPORT_TRANSFER"
    OTHER = "OTHER"


class HireType(str, enum.Enum):
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    # stored as UTC
    start_at = Column(DateTime(timezone=True), nullable=False)
    end_at = Column(DateTime(timezone=True), nullable=False)
    purpose = Column(Enum(BookingPurpose, native_enum=False, length=20), nullable=False)
    hire_type = Column(Enum(HireType, native_enum=False, length=10), nullable=False)
    status = Column(
        Enum(BookingStatus, native_enum=False, length=20),
        nullable=False,
        default=BookingStatus.CONFIRMED,
    )
    hired_at = Column(DateTime(timezone=True), nullable=True)
    returned_at = Column(DateTime(timezone=True), nullable=True)
    total_cost = Column(Numeric(14, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    vehicle = relationship("Vehicle", back_populates="bookings")
    user = relationship("User", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("start_at < end_at", name="check_booking_range_ordered"),
        Index("ix_bookings_vehicle_status_end", "vehicle_id", "status", "end_at"),
    )

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(self.start_at, self.end_at)

    @property
    def is_hired(self) -> bool:
        """Physically handed over and not yet returned."""
        return (
            self.status == BookingStatus.CONFIRMED
            and self.hired_at is not None
            and self.returned_at is None
        )

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, vehicle={self.vehicle_id}, status={self.status})>"
