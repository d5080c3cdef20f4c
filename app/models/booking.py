"""Bookable venues and table reservations."""
from sqlalchemy import (
    Column, String, Text, Integer, Boolean, Date, ForeignKey, Index, Enum as SQLEnum, text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base, JSONType, generate_id, UTCDateTime
import enum

ALL_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class TableShape(str, enum.Enum):
    square = "square"
    circle = "circle"
    rectangle = "rectangle"


class BookingStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


# Statuses that hold a table/date/slot
ACTIVE_STATUSES = (BookingStatus.pending, BookingStatus.confirmed)
_ACTIVE_WHERE = "status IN ('pending', 'confirmed')"


class BookingVenue(Base):
    __tablename__ = "booking_venues"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    venue_type = Column(String(100), nullable=False)  # Lunch, Dinner, Breakfast, ...

    # [{tableNumber, capacity, position: {x, y}, shape}]
    tables = Column(JSONType, nullable=False, default=list)
    # [{name, startTime, endTime, daysAvailable: [weekday names]}]
    time_slots = Column(JSONType, nullable=False, default=list)

    layout_image = Column(String(1000), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(UTCDateTime(timezone=True), server_default=func.now())

    user = relationship("User", backref="booking_venues")
    bookings = relationship(
        "Booking", back_populates="venue", cascade="all, delete-orphan", passive_deletes=True
    )

    def find_table(self, table_number: str) -> dict | None:
        for t in self.tables or []:
            if str(t.get("tableNumber")) == table_number:
                return t
        return None

    def find_time_slot(self, start_time: str, end_time: str) -> dict | None:
        for s in self.time_slots or []:
            if s.get("startTime") == start_time and s.get("endTime") == end_time:
                return s
        return None


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # At most one pending/confirmed booking per table, day and slot window
        Index(
            "uq_bookings_active_slot",
            "venue_id",
            "table_number",
            "date",
            "slot_start_time",
            "slot_end_time",
            unique=True,
            sqlite_where=text(_ACTIVE_WHERE),
            postgresql_where=text(_ACTIVE_WHERE),
        ),
        Index("idx_bookings_venue_date_table", "venue_id", "date", "table_number"),
        Index("idx_bookings_status_created", "status", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    venue_id = Column(String(36), ForeignKey("booking_venues.id", ondelete="CASCADE"), nullable=False)

    # By value: the venue's table list can change independently
    table_number = Column(String(50), nullable=False)
    # Server-local calendar day
    date = Column(Date, nullable=False)

    slot_name = Column(String(100), nullable=False, default="")
    slot_start_time = Column(String(5), nullable=False)
    slot_end_time = Column(String(5), nullable=False)

    guest_name = Column(String(255), nullable=False)
    guest_email = Column(String(255), nullable=False)
    guest_phone = Column(String(50), nullable=False)
    number_of_guests = Column(Integer, nullable=False, default=1)
    special_requests = Column(Text, nullable=False, default="")

    status = Column(SQLEnum(BookingStatus), nullable=False, default=BookingStatus.pending)
    admin_notes = Column(Text, nullable=False, default="")
    confirmed_at = Column(UTCDateTime(timezone=True), nullable=True)

    created_at = Column(UTCDateTime(timezone=True), server_default=func.now())

    venue = relationship("BookingVenue", back_populates="bookings")

    @property
    def time_slot(self) -> dict:
        return {"name": self.slot_name, "startTime": self.slot_start_time, "endTime": self.slot_end_time}
