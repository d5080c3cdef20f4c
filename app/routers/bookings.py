"""Public booking flow and owner-side booking administration."""
import logging
from datetime import date, datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, joinedload

from app.database import get_db
from app.dependencies import get_current_user
from app.errors import BadRequestError, NotFoundError
from app.models.booking import Booking, BookingVenue
from app.models.user import User
from app.schemas.booking import (
    AvailabilityResponse,
    AvailabilitySlot,
    BookingAction,
    BookingRequest,
    BookingResponse,
    PublicVenueResponse,
)
from app.services import booking as booking_service
from app.services.access import ensure_owner

log = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _parse_day(value: str | None) -> date:
    if not value or not value.strip():
        raise BadRequestError("Date is required")
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return booking_service.day_bucket(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        raise BadRequestError("Invalid date format")


def _active_venue(db: Session, venue_id: str) -> BookingVenue:
    venue = (
        db.query(BookingVenue)
        .filter(BookingVenue.id == venue_id, BookingVenue.is_active.is_(True))
        .first()
    )
    if not venue:
        raise NotFoundError("Venue not found or inactive")
    return venue


def _owned_booking(db: Session, booking_id: str, user: User, action: str) -> Booking:
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    return ensure_owner(booking, user, not_found="Booking not found", forbidden=f"Not authorized to {action} this booking")


# --- Public ---


@router.get("/public/venues")
def list_public_venues(db: Session = Depends(get_db)):
    venues = (
        db.query(BookingVenue)
        .filter(BookingVenue.is_active.is_(True))
        .order_by(BookingVenue.created_at.desc())
        .all()
    )
    return {"success": True, "venues": [PublicVenueResponse.model_validate(v) for v in venues]}


@router.get("/public/{venue_id}/availability", response_model=AvailabilityResponse)
def get_availability(
    venue_id: str,
    day: str | None = Query(None, alias="date"),
    db: Session = Depends(get_db),
):
    """Held slots for one day. Guest details are never included."""
    target = _parse_day(day)
    venue = _active_venue(db, venue_id)
    held = booking_service.availability(db, venue, target)
    return AvailabilityResponse(
        venue=PublicVenueResponse.model_validate(venue),
        day=target,
        bookings=[AvailabilitySlot.model_validate(b) for b in held],
    )


@router.post("/public/{venue_id}/book", status_code=201)
def create_booking(venue_id: str, data: BookingRequest, db: Session = Depends(get_db)):
    venue = _active_venue(db, venue_id)
    booking = booking_service.try_book(db, venue, data)
    log.info("Booking %s created: venue=%s table=%s date=%s", booking.id, venue.id, booking.table_number, booking.date)
    return {
        "success": True,
        "booking": BookingResponse.model_validate(booking),
        "message": "Booking request submitted successfully. You will receive a confirmation soon.",
    }


# --- Owner ---


@router.get("/venue/{venue_id}")
def list_bookings_for_venue(
    venue_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    venue = db.query(BookingVenue).filter(BookingVenue.id == venue_id).first()
    ensure_owner(venue, current_user, not_found="Venue not found", forbidden="Not authorized to access bookings for this venue")
    bookings = booking_service.venue_bookings(db, venue)
    return {"success": True, "bookings": [BookingResponse.model_validate(b) for b in bookings]}


@router.get("/admin/all")
def list_all_my_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Every booking across the caller's venues, newest first."""
    bookings = (
        db.query(Booking)
        .join(BookingVenue, Booking.venue_id == BookingVenue.id)
        .filter(BookingVenue.user_id == current_user.id)
        .options(joinedload(Booking.venue))
        .order_by(Booking.created_at.desc())
        .all()
    )
    return {"success": True, "bookings": [BookingResponse.model_validate(b) for b in bookings]}


@router.put("/admin/{booking_id}/confirm")
def confirm_booking(
    booking_id: str,
    data: BookingAction | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = _owned_booking(db, booking_id, current_user, "confirm")
    booking = booking_service.confirm(db, booking, data.admin_notes if data else None)
    return {"success": True, "message": "Booking confirmed", "booking": BookingResponse.model_validate(booking)}


@router.put("/admin/{booking_id}/cancel")
def cancel_booking(
    booking_id: str,
    data: BookingAction | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = _owned_booking(db, booking_id, current_user, "cancel")
    booking = booking_service.cancel(db, booking, data.admin_notes if data else None)
    return {"success": True, "message": "Booking cancelled", "booking": BookingResponse.model_validate(booking)}


@router.delete("/admin/{booking_id}")
def delete_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    booking = _owned_booking(db, booking_id, current_user, "delete")
    db.delete(booking)
    db.commit()
    return {"success": True, "message": "Booking deleted successfully"}
