"""Ownership checks shared by every protected resource.

Polls and venues are owned by the user who created them; a booking is owned by
whoever owns its venue. Existence is always checked before ownership, so a missing
resource is a 404 and a foreign one a 403.
"""
from app.errors import ForbiddenError, NotFoundError
from app.models.booking import Booking, BookingVenue
from app.models.poll import Poll
from app.models.user import User


def owner_id_of(resource) -> str | None:
    if isinstance(resource, (Poll, BookingVenue)):
        return resource.user_id
    if isinstance(resource, Booking):
        return resource.venue.user_id if resource.venue else None
    raise TypeError(f"No ownership rule for {type(resource).__name__}")


def authorize(caller: User, resource) -> bool:
    owner_id = owner_id_of(resource)
    return owner_id is not None and owner_id == caller.id


def ensure_owner(resource, caller: User, *, not_found: str = "Not found", forbidden: str = "Not authorized"):
    """Return the resource if the caller owns it; 404 when absent, 403 when foreign."""
    if resource is None:
        raise NotFoundError(not_found)
    if not authorize(caller, resource):
        raise ForbiddenError(forbidden)
    return resource
