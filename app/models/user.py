import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import relationship

from app.database import Base


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class User(Base):
    """Read-side copy of the identity provider's user record."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True, unique=True)
    role = Column(Enum(Role, native_enum=False, length=10), nullable=False, default=Role.USER)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    bookings = relationship("Booking", back_populates="user")
