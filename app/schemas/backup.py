"""Backup document: flat lists of records whose cross references use exported IDs."""
from datetime import date, datetime
from pydantic import Field
from app.models.booking import BookingStatus
from app.schemas.booking import TableSpec, TimeSlotRef, TimeSlotSpec
from app.schemas.common import CamelModel
from app.schemas.poll import Answer, Question

BACKUP_VERSION = 1


class BackupPoll(CamelModel):
    id: str
    title: str
    description: str = ""
    questions: list[Question]
    consent_enabled: bool = False
    consent_text: str | None = None
    created_at: datetime | None = None
    expire_at: datetime


class BackupSubmission(CamelModel):
    id: str
    poll_id: str = Field(alias="poll")
    participant_name: str
    participant_email: str
    participant_phone: str = ""
    answers: list[Answer] = []
    consent_agreed: bool = False
    submitted_at: datetime | None = None
    # Informational on export; the importer always copies the parent poll's value
    expire_at: datetime | None = None


class BackupVenue(CamelModel):
    id: str
    name: str
    description: str = ""
    venue_type: str
    tables: list[TableSpec] = []
    time_slots: list[TimeSlotSpec] = []
    layout_image: str | None = None
    is_active: bool = True
    created_at: datetime | None = None


class BackupBooking(CamelModel):
    id: str
    venue_id: str = Field(alias="venue")
    table_number: str
    booking_date: date = Field(alias="date")
    time_slot: TimeSlotRef
    guest_name: str
    guest_email: str
    guest_phone: str
    number_of_guests: int = 1
    special_requests: str = ""
    status: BookingStatus = BookingStatus.pending
    admin_notes: str = ""
    confirmed_at: datetime | None = None
    created_at: datetime | None = None


class BackupDocument(CamelModel):
    version: int = BACKUP_VERSION
    exported_at: datetime | None = None
    polls: list[BackupPoll] = []
    submissions: list[BackupSubmission] = []
    venues: list[BackupVenue] = []
    bookings: list[BackupBooking] = []


class ImportSummary(CamelModel):
    imported: dict[str, int]
    skipped: dict[str, int]
