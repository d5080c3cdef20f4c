"""Admin users and their business profile."""
from sqlalchemy import Column, String, Enum as SQLEnum, Boolean
from sqlalchemy.sql import func
from app.database import Base, generate_id, UTCDateTime
import enum


class UserRole(str, enum.Enum):
    admin = "admin"
    manager = "manager"
    staff = "staff"


class BusinessType(str, enum.Enum):
    restaurant = "restaurant"
    hotel = "hotel"
    cafe = "cafe"
    bar = "bar"
    venue = "venue"
    other = "other"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    business_name = Column(String(255), nullable=False, default="")
    business_type = Column(SQLEnum(BusinessType), nullable=False, default=BusinessType.restaurant)

    # Fixed at creation
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.admin)
    is_setup_complete = Column(Boolean, nullable=False, default=False)

    created_at = Column(UTCDateTime(timezone=True), server_default=func.now())
