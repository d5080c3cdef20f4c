from datetime import datetime, timedelta, timezone

from app.models.poll import Poll, Submission
from app.models.user import User
from app.services.expiry import live_polls, sweep_expired


def _seed(db, expire_at, title):
    poll = Poll(user_id="u-1", title=title, questions=[{"id": "q1", "text": "?", "type": "text"}], expire_at=expire_at)
    db.add(poll)
    db.flush()
    for i in range(2):
        db.add(
            Submission(
                poll_id=poll.id,
                participant_name=f"P{i}",
                participant_email=f"p{i}@example.com",
                answers=[{"questionId": "q1", "answer": "yes"}],
                expire_at=expire_at,
            )
        )
    db.commit()
    return poll


def test_sweep_removes_only_expired(db_session):
    db_session.add(User(id="u-1", name="Owner", email="o@example.com", hashed_password="x"))
    db_session.commit()
    now = datetime.now(timezone.utc)
    expired = _seed(db_session, now - timedelta(minutes=5), "Old")
    live = _seed(db_session, now + timedelta(hours=1), "New")

    assert live_polls(db_session, now).count() == 1

    assert sweep_expired(db_session, now) == (1, 2)
    assert db_session.query(Poll).filter(Poll.id == expired.id).count() == 0
    assert db_session.query(Submission).filter(Submission.poll_id == live.id).count() == 2

    # Idempotent
    assert sweep_expired(db_session, now) == (0, 0)


def test_sweep_catches_submissions_with_stale_deadline(db_session):
    db_session.add(User(id="u-1", name="Owner", email="o@example.com", hashed_password="x"))
    db_session.commit()
    now = datetime.now(timezone.utc)
    poll = _seed(db_session, now - timedelta(minutes=1), "Old")
    # A submission whose own deadline drifted later still goes with its poll
    db_session.query(Submission).filter(Submission.poll_id == poll.id).update(
        {Submission.expire_at: now + timedelta(days=1)}, synchronize_session=False
    )
    db_session.commit()

    assert sweep_expired(db_session, now) == (1, 2)
