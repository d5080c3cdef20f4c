"""Poll expiry: read-path filtering plus a periodic sweep.

A poll and its submissions carry the same expire_at. Once that instant passes, reads
stop returning them immediately (every query goes through live_polls / get_live_poll)
and the sweep physically removes them on its next tick.
"""
import logging
from datetime import datetime, timezone
from sqlalchemy import or_, select
from sqlalchemy.orm import Session
from app.database import SessionLocal
from app.models.poll import Poll, Submission

log = logging.getLogger("uvicorn.error")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Aware datetimes are converted to UTC; naive ones are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def live_polls(db: Session, now: datetime | None = None):
    now = now or utcnow()
    return db.query(Poll).filter(Poll.expire_at > now)


def get_live_poll(db: Session, poll_id: str, now: datetime | None = None) -> Poll | None:
    return live_polls(db, now).filter(Poll.id == poll_id).first()


def live_submissions(db: Session, poll_id: str, now: datetime | None = None):
    now = now or utcnow()
    return db.query(Submission).filter(Submission.poll_id == poll_id, Submission.expire_at > now)


def move_poll_deadline(db: Session, poll: Poll, expire_at: datetime) -> int:
    """Set a new expire_at on the poll and copy it onto every existing submission."""
    poll.expire_at = expire_at
    return (
        db.query(Submission)
        .filter(Submission.poll_id == poll.id)
        .update({Submission.expire_at: expire_at}, synchronize_session=False)
    )


def sweep_expired(db: Session, now: datetime | None = None) -> tuple[int, int]:
    """Delete expired polls and their submissions in one transaction. Returns (polls, submissions)."""
    now = now or utcnow()
    expired_poll_ids = select(Poll.id).where(Poll.expire_at <= now)
    deleted_submissions = (
        db.query(Submission)
        .filter(or_(Submission.expire_at <= now, Submission.poll_id.in_(expired_poll_ids)))
        .delete(synchronize_session=False)
    )
    deleted_polls = db.query(Poll).filter(Poll.expire_at <= now).delete(synchronize_session=False)
    db.commit()
    return deleted_polls, deleted_submissions


def run_expiry_sweep_job() -> None:
    """Scheduler entry point: remove polls and submissions whose expire_at has passed."""
    db: Session = SessionLocal()
    try:
        polls, submissions = sweep_expired(db)
        if polls or submissions:
            log.info("Expiry sweep: deleted %d poll(s) and %d submission(s).", polls, submissions)
    except Exception:
        db.rollback()
        log.exception("Expiry sweep failed; will retry on next tick")
    finally:
        db.close()
