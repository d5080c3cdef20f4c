"""Venue management for the owning user."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.config import get_settings
from app.database import get_db
from app.dependencies import get_current_user
from app.models.booking import Booking, BookingVenue
from app.models.user import User
from app.schemas.booking import BookingResponse, VenueCreate, VenueResponse, VenueUpdate
from app.services import booking as booking_service
from app.services.access import ensure_owner

router = APIRouter(prefix="/booking-venues", tags=["booking-venues"])


def _dump_json(items) -> list[dict]:
    return [i.model_dump(by_alias=True, mode="json") for i in items]


def _owned_venue(db: Session, venue_id: str, user: User, action: str) -> BookingVenue:
    venue = db.query(BookingVenue).filter(BookingVenue.id == venue_id).first()
    return ensure_owner(venue, user, not_found="Venue not found", forbidden=f"Not authorized to {action} this venue")


@router.post("", status_code=201)
def create_venue(
    data: VenueCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    venue = BookingVenue(
        user_id=current_user.id,
        name=data.name,
        description=data.description,
        venue_type=data.venue_type,
        tables=_dump_json(data.tables),
        time_slots=_dump_json(data.time_slots),
        layout_image=data.layout_image,
    )
    db.add(venue)
    db.commit()
    db.refresh(venue)
    return {"success": True, "venue": VenueResponse.model_validate(venue)}


@router.get("")
def list_my_venues(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    venues = (
        db.query(BookingVenue)
        .filter(BookingVenue.user_id == current_user.id)
        .order_by(BookingVenue.created_at.desc())
        .all()
    )
    return {"success": True, "venues": [VenueResponse.model_validate(v) for v in venues]}


@router.get("/{venue_id}")
def get_venue(
    venue_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    venue = _owned_venue(db, venue_id, current_user, "access")
    return {"success": True, "venue": VenueResponse.model_validate(venue)}


@router.put("/{venue_id}")
def update_venue(
    venue_id: str,
    data: VenueUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Existing bookings keep their table number and slot even if those are edited away here."""
    venue = _owned_venue(db, venue_id, current_user, "update")
    if data.name is not None and data.name.strip():
        venue.name = data.name.strip()
    if data.description is not None:
        venue.description = data.description
    if data.venue_type is not None and data.venue_type.strip():
        venue.venue_type = data.venue_type.strip()
    if data.tables is not None:
        venue.tables = _dump_json(data.tables)
    if data.time_slots is not None:
        venue.time_slots = _dump_json(data.time_slots)
    if "layout_image" in data.model_fields_set:
        venue.layout_image = data.layout_image
    if data.is_active is not None:
        venue.is_active = data.is_active
    db.commit()
    db.refresh(venue)
    return {"success": True, "venue": VenueResponse.model_validate(venue)}


@router.delete("/{venue_id}")
def delete_venue(
    venue_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    venue = _owned_venue(db, venue_id, current_user, "delete")
    db.query(Booking).filter(Booking.venue_id == venue.id).delete(synchronize_session=False)
    db.delete(venue)
    db.commit()
    return {"success": True, "message": "Venue deleted successfully"}


@router.get("/{venue_id}/bookings")
def list_venue_bookings(
    venue_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    venue = _owned_venue(db, venue_id, current_user, "access bookings for")
    bookings = booking_service.venue_bookings(db, venue)
    return {"success": True, "bookings": [BookingResponse.model_validate(b) for b in bookings]}


@router.get("/{venue_id}/qrcode")
def venue_booking_link(
    venue_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Public booking page URL for this venue; the client renders it as a QR code."""
    venue = _owned_venue(db, venue_id, current_user, "access")
    url = f"{get_settings().public_client_url}/booking/{venue.id}"
    return {"success": True, "url": url}
