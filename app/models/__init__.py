"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table; no migration scripts needed for fresh installs.
"""
from app.models.user import User
from app.models.poll import Poll, Submission
from app.models.booking import BookingVenue, Booking
from app.models.site_settings import SiteSettings

__all__ = [
    "User",
    "Poll",
    "Submission",
    "BookingVenue",
    "Booking",
    "SiteSettings",
]
