"""Account deletion: removes the user together with everything they own."""
import logging
from sqlalchemy import select
from sqlalchemy.orm import Session
from app.models.booking import Booking, BookingVenue
from app.models.poll import Poll, Submission
from app.models.site_settings import SiteSettings
from app.models.user import User

log = logging.getLogger("uvicorn.error")


def delete_account(db: Session, user: User) -> dict[str, int]:
    """Delete the user's bookings, venues, submissions and polls, then the user, in one commit.

    When the last user is gone the global settings row is removed too, so setup can run again.
    """
    uid = user.id
    venue_ids = select(BookingVenue.id).where(BookingVenue.user_id == uid)
    poll_ids = select(Poll.id).where(Poll.user_id == uid)
    counts = {
        "bookings": db.query(Booking).filter(Booking.venue_id.in_(venue_ids)).delete(synchronize_session=False),
        "submissions": db.query(Submission).filter(Submission.poll_id.in_(poll_ids)).delete(synchronize_session=False),
    }
    counts["venues"] = db.query(BookingVenue).filter(BookingVenue.user_id == uid).delete(synchronize_session=False)
    counts["polls"] = db.query(Poll).filter(Poll.user_id == uid).delete(synchronize_session=False)
    db.query(User).filter(User.id == uid).delete(synchronize_session=False)
    if db.query(User).count() == 0:
        counts["settings"] = db.query(SiteSettings).delete(synchronize_session=False)
    db.commit()
    log.info("Account %s deleted with its data: %s", uid, counts)
    return counts
