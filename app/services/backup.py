"""Export and import of one user's polls, submissions, venues and bookings.

Import never reuses exported IDs. Every record gets a fresh ID and an old -> new
translation table rewrites submission.poll and booking.venue references. The whole
import is one transaction: it either lands completely or not at all.
"""
from __future__ import annotations

import logging
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.database import generate_id
from app.models.booking import ACTIVE_STATUSES, Booking, BookingVenue
from app.models.poll import Poll, Submission
from app.models.user import User
from app.schemas.backup import (
    BACKUP_VERSION,
    BackupBooking,
    BackupDocument,
    BackupPoll,
    BackupSubmission,
    BackupVenue,
    ImportSummary,
)
from app.services import expiry

log = logging.getLogger("uvicorn.error")


def export_backup(db: Session, user: User) -> BackupDocument:
    now = expiry.utcnow()
    polls = expiry.live_polls(db, now).filter(Poll.user_id == user.id).order_by(Poll.created_at).all()
    poll_ids = [p.id for p in polls]
    submissions = (
        db.query(Submission)
        .filter(Submission.poll_id.in_(poll_ids), Submission.expire_at > now)
        .order_by(Submission.submitted_at)
        .all()
        if poll_ids
        else []
    )
    venues = db.query(BookingVenue).filter(BookingVenue.user_id == user.id).order_by(BookingVenue.created_at).all()
    bookings = (
        db.query(Booking)
        .filter(Booking.venue_id.in_(select(BookingVenue.id).where(BookingVenue.user_id == user.id)))
        .order_by(Booking.date, Booking.slot_start_time)
        .all()
    )
    return BackupDocument(
        version=BACKUP_VERSION,
        exported_at=now,
        polls=[BackupPoll.model_validate(p) for p in polls],
        submissions=[
            BackupSubmission(
                id=s.id,
                poll_id=s.poll_id,
                participant_name=s.participant_name,
                participant_email=s.participant_email,
                participant_phone=s.participant_phone,
                answers=s.answers or [],
                consent_agreed=s.consent_agreed,
                submitted_at=s.submitted_at,
                expire_at=s.expire_at,
            )
            for s in submissions
        ],
        venues=[BackupVenue.model_validate(v) for v in venues],
        bookings=[
            BackupBooking(
                id=b.id,
                venue_id=b.venue_id,
                table_number=b.table_number,
                booking_date=b.date,
                time_slot=b.time_slot,
                guest_name=b.guest_name,
                guest_email=b.guest_email,
                guest_phone=b.guest_phone,
                number_of_guests=b.number_of_guests,
                special_requests=b.special_requests,
                status=b.status,
                admin_notes=b.admin_notes,
                confirmed_at=b.confirmed_at,
                created_at=b.created_at,
            )
            for b in bookings
        ],
    )


def _dump_json(items) -> list[dict]:
    return [i.model_dump(by_alias=True, mode="json") for i in items]


def import_backup(db: Session, user: User, doc: BackupDocument) -> ImportSummary:
    now = expiry.utcnow()
    imported = {"polls": 0, "submissions": 0, "venues": 0, "bookings": 0}
    skipped = {"polls": 0, "submissions": 0, "venues": 0, "bookings": 0}
    poll_map: dict[str, Poll] = {}
    venue_map: dict[str, str] = {}

    try:
        for p in doc.polls:
            expire_at = expiry.to_utc(p.expire_at)
            if expire_at <= now:
                skipped["polls"] += 1
                continue
            poll = Poll(
                id=generate_id(),
                user_id=user.id,
                title=p.title,
                description=p.description,
                questions=_dump_json(p.questions),
                consent_enabled=p.consent_enabled,
                consent_text=p.consent_text if p.consent_enabled else None,
                expire_at=expire_at,
            )
            if p.created_at:
                poll.created_at = expiry.to_utc(p.created_at)
            db.add(poll)
            poll_map[p.id] = poll
            imported["polls"] += 1

        for s in doc.submissions:
            parent = poll_map.get(s.poll_id)
            if parent is None:
                # Parent missing from the document or already expired
                skipped["submissions"] += 1
                continue
            submission = Submission(
                id=generate_id(),
                poll_id=parent.id,
                participant_name=s.participant_name,
                participant_email=s.participant_email,
                participant_phone=s.participant_phone,
                answers=_dump_json(s.answers),
                consent_agreed=s.consent_agreed if parent.consent_enabled else False,
                expire_at=parent.expire_at,
            )
            if s.submitted_at:
                submission.submitted_at = expiry.to_utc(s.submitted_at)
            db.add(submission)
            imported["submissions"] += 1

        for v in doc.venues:
            venue = BookingVenue(
                id=generate_id(),
                user_id=user.id,
                name=v.name,
                description=v.description,
                venue_type=v.venue_type,
                tables=_dump_json(v.tables),
                time_slots=_dump_json(v.time_slots),
                layout_image=v.layout_image,
                is_active=v.is_active,
            )
            db.add(venue)
            venue_map[v.id] = venue.id
            imported["venues"] += 1

        held: set[tuple] = set()
        for b in doc.bookings:
            venue_id = venue_map.get(b.venue_id)
            if venue_id is None:
                skipped["bookings"] += 1
                continue
            if b.status in ACTIVE_STATUSES:
                key = (venue_id, b.table_number, b.booking_date, b.time_slot.start_time, b.time_slot.end_time)
                if key in held:
                    skipped["bookings"] += 1
                    continue
                held.add(key)
            db.add(
                Booking(
                    id=generate_id(),
                    venue_id=venue_id,
                    table_number=b.table_number,
                    date=b.booking_date,
                    slot_name=b.time_slot.name,
                    slot_start_time=b.time_slot.start_time,
                    slot_end_time=b.time_slot.end_time,
                    guest_name=b.guest_name,
                    guest_email=b.guest_email,
                    guest_phone=b.guest_phone,
                    number_of_guests=b.number_of_guests,
                    special_requests=b.special_requests,
                    status=b.status,
                    admin_notes=b.admin_notes,
                    confirmed_at=expiry.to_utc(b.confirmed_at) if b.confirmed_at else None,
                )
            )
            imported["bookings"] += 1

        db.commit()
    except Exception:
        db.rollback()
        raise

    log.info("Backup import for user=%s: imported=%s skipped=%s", user.id, imported, skipped)
    return ImportSummary(imported=imported, skipped=skipped)
