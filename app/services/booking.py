"""Table booking: conflict resolution, availability and the booking state machine.

A (venue, table, day, slot start, slot end) tuple may hold at most one pending or
confirmed booking. try_book checks for an existing holder first, and the partial
unique index uq_bookings_active_slot rejects the second of two concurrent inserts that
both passed the check; both paths end in the same ConflictError.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import BadRequestError, ConflictError
from app.models.booking import ACTIVE_STATUSES, Booking, BookingStatus, BookingVenue
from app.schemas.booking import BookingRequest

log = logging.getLogger("uvicorn.error")

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def day_bucket(value: date | datetime) -> date:
    """Calendar day of a requested date in server-local time."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def find_conflict(
    db: Session,
    venue_id: str,
    table_number: str,
    day: date,
    start_time: str,
    end_time: str,
) -> Booking | None:
    return (
        db.query(Booking)
        .filter(
            Booking.venue_id == venue_id,
            Booking.table_number == table_number,
            Booking.date == day,
            Booking.slot_start_time == start_time,
            Booking.slot_end_time == end_time,
            Booking.status.in_(ACTIVE_STATUSES),
        )
        .first()
    )


def _validate_request(venue: BookingVenue, data: BookingRequest, day: date) -> None:
    if day < datetime.now().date():
        raise BadRequestError("Bookings cannot be made for past dates")
    table = venue.find_table(data.table_number)
    if table is None:
        raise BadRequestError(f"Table {data.table_number} does not exist at this venue")
    slot = venue.find_time_slot(data.time_slot.start_time, data.time_slot.end_time)
    if slot is None:
        raise BadRequestError("The selected time slot is not offered by this venue")
    weekday = WEEKDAYS[day.weekday()]
    if weekday not in (slot.get("daysAvailable") or WEEKDAYS):
        raise BadRequestError(f"The selected time slot is not available on {weekday}")
    capacity = table.get("capacity")
    if capacity is not None and data.number_of_guests > int(capacity):
        raise BadRequestError(f"Table {data.table_number} seats at most {capacity} guests")


def try_book(db: Session, venue: BookingVenue, data: BookingRequest) -> Booking:
    """Create a pending booking, or raise ConflictError if the table/day/slot is taken."""
    day = day_bucket(data.booking_date)
    _validate_request(venue, data, day)

    start, end = data.time_slot.start_time, data.time_slot.end_time
    if find_conflict(db, venue.id, data.table_number, day, start, end):
        log.info("Booking conflict: venue=%s table=%s date=%s slot=%s-%s", venue.id, data.table_number, day, start, end)
        raise ConflictError()

    slot_name = data.time_slot.name
    if not slot_name:
        slot_name = (venue.find_time_slot(start, end) or {}).get("name", "")

    booking = Booking(
        venue_id=venue.id,
        table_number=data.table_number,
        date=day,
        slot_name=slot_name,
        slot_start_time=start,
        slot_end_time=end,
        guest_name=data.guest_name,
        guest_email=str(data.guest_email),
        guest_phone=data.guest_phone,
        number_of_guests=data.number_of_guests,
        special_requests=data.special_requests,
        status=BookingStatus.pending,
    )
    db.add(booking)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request took the slot between our check and insert
        db.rollback()
        log.info("Booking conflict on insert: venue=%s table=%s date=%s slot=%s-%s", venue.id, data.table_number, day, start, end)
        raise ConflictError()
    db.refresh(booking)
    return booking


def venue_bookings(db: Session, venue: BookingVenue) -> list[Booking]:
    """Every booking at the venue, any status, by day then slot start."""
    return (
        db.query(Booking)
        .filter(Booking.venue_id == venue.id)
        .order_by(Booking.date, Booking.slot_start_time, Booking.table_number)
        .all()
    )


def availability(db: Session, venue: BookingVenue, day: date) -> list[Booking]:
    """Pending/confirmed bookings at the venue on the given day."""
    return (
        db.query(Booking)
        .filter(
            Booking.venue_id == venue.id,
            Booking.date == day,
            Booking.status.in_(ACTIVE_STATUSES),
        )
        .order_by(Booking.slot_start_time, Booking.table_number)
        .all()
    )


def confirm(db: Session, booking: Booking, admin_notes: str | None = None) -> Booking:
    if booking.status != BookingStatus.pending:
        raise BadRequestError(f"Only pending bookings can be confirmed (current status: {booking.status.value})")
    booking.status = BookingStatus.confirmed
    booking.confirmed_at = datetime.now(timezone.utc)
    if admin_notes:
        booking.admin_notes = admin_notes
    db.commit()
    db.refresh(booking)
    return booking


def cancel(db: Session, booking: Booking, admin_notes: str | None = None) -> Booking:
    if booking.status not in ACTIVE_STATUSES:
        raise BadRequestError(f"Only pending or confirmed bookings can be cancelled (current status: {booking.status.value})")
    booking.status = BookingStatus.cancelled
    if admin_notes:
        booking.admin_notes = admin_notes
    db.commit()
    db.refresh(booking)
    return booking
