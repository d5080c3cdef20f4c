"""Venue and booking schemas."""
from datetime import date, datetime
from pydantic import EmailStr, Field, field_validator
from app.models.booking import ALL_DAYS, BookingStatus, TableShape
from app.schemas.common import CamelModel

_HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


def _table_number_str(v) -> str:
    # Accept numeric table numbers from clients; stored and matched as text
    v = str(v if v is not None else "").strip()
    if not v:
        raise ValueError("tableNumber is required")
    return v


class TablePosition(CamelModel):
    x: float = 0
    y: float = 0


class TableSpec(CamelModel):
    table_number: str
    capacity: int = Field(default=4, ge=1)
    position: TablePosition = TablePosition()
    shape: TableShape = TableShape.square

    normalize_table_number = field_validator("table_number", mode="before")(_table_number_str)


class TimeSlotSpec(CamelModel):
    name: str
    start_time: str = Field(pattern=_HHMM)
    end_time: str = Field(pattern=_HHMM)
    days_available: list[str] = Field(default_factory=lambda: list(ALL_DAYS))

    @field_validator("days_available")
    @classmethod
    def known_days(cls, v: list[str]) -> list[str]:
        unknown = [d for d in v if d not in ALL_DAYS]
        if unknown:
            raise ValueError(f"Unknown day(s): {', '.join(unknown)}")
        return v


def _unique_tables(tables: list[TableSpec] | None) -> list[TableSpec] | None:
    if tables is not None:
        numbers = [t.table_number for t in tables]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Table numbers must be unique within a venue")
    return tables


class VenueCreate(CamelModel):
    name: str
    description: str = ""
    venue_type: str
    tables: list[TableSpec] = []
    time_slots: list[TimeSlotSpec] = []
    layout_image: str | None = None

    @field_validator("name", "venue_type")
    @classmethod
    def required_text(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Please provide venue name and type")
        return v

    unique_tables = field_validator("tables")(_unique_tables)


class VenueUpdate(CamelModel):
    """All optional; only provided fields are updated."""
    name: str | None = None
    description: str | None = None
    venue_type: str | None = None
    tables: list[TableSpec] | None = None
    time_slots: list[TimeSlotSpec] | None = None
    layout_image: str | None = None
    is_active: bool | None = None

    unique_tables = field_validator("tables")(_unique_tables)


class PublicVenueResponse(CamelModel):
    id: str
    name: str
    description: str
    venue_type: str
    tables: list[TableSpec]
    time_slots: list[TimeSlotSpec]
    layout_image: str | None = None


class VenueResponse(PublicVenueResponse):
    user_id: str
    is_active: bool
    created_at: datetime | None = None


class VenueSummary(CamelModel):
    id: str
    name: str
    venue_type: str


class TimeSlotRef(CamelModel):
    name: str = ""
    start_time: str = Field(pattern=_HHMM)
    end_time: str = Field(pattern=_HHMM)


class BookingRequest(CamelModel):
    table_number: str
    booking_date: datetime | date = Field(alias="date")
    time_slot: TimeSlotRef
    guest_name: str
    guest_email: EmailStr
    guest_phone: str
    number_of_guests: int = Field(default=1, ge=1)
    special_requests: str = ""

    normalize_table_number = field_validator("table_number", mode="before")(_table_number_str)

    @field_validator("guest_name", "guest_phone")
    @classmethod
    def required_text(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Please provide all required fields")
        return v


class BookingResponse(CamelModel):
    id: str
    venue_id: str
    table_number: str
    booking_date: date = Field(alias="date")
    time_slot: TimeSlotRef
    guest_name: str
    guest_email: str
    guest_phone: str
    number_of_guests: int
    special_requests: str
    status: BookingStatus
    admin_notes: str
    confirmed_at: datetime | None = None
    created_at: datetime | None = None
    venue: VenueSummary | None = None


class AvailabilitySlot(CamelModel):
    """Public view of a held slot; carries no guest details."""
    table_number: str
    time_slot: TimeSlotRef
    status: BookingStatus


class AvailabilityResponse(CamelModel):
    venue: PublicVenueResponse
    day: date = Field(alias="date")
    bookings: list[AvailabilitySlot]


class BookingAction(CamelModel):
    admin_notes: str | None = None
