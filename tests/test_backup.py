from datetime import datetime, timedelta, timezone

from app.models.booking import Booking
from app.models.poll import Poll, Submission
from tests.conftest import ADMIN, booking_body, in_hours

SUBMISSION = {
    "participantName": "Pat Participant",
    "participantEmail": "pat@example.com",
    "answers": [{"questionId": "q1", "answer": "Sushi"}],
}


def test_export_then_import_assigns_new_ids(client, admin_headers, make_poll, make_venue, db_session):
    poll = make_poll()
    client.post(f"/public/submit/{poll['id']}", json=SUBMISSION)
    venue = make_venue()
    client.post(f"/bookings/public/{venue['id']}/book", json=booking_body())

    r = client.post("/auth/export-backup", headers=admin_headers)
    assert r.status_code == 200
    doc = r.json()
    assert [p["id"] for p in doc["polls"]] == [poll["id"]]
    assert doc["submissions"][0]["poll"] == poll["id"]
    assert doc["bookings"][0]["venue"] == venue["id"]

    r = client.post("/auth/import-backup", json=doc, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["imported"] == {"polls": 1, "submissions": 1, "venues": 1, "bookings": 1}

    polls = db_session.query(Poll).all()
    assert len(polls) == 2
    new_poll = next(p for p in polls if p.id != poll["id"])
    copied = db_session.query(Submission).filter(Submission.poll_id == new_poll.id).one()
    assert copied.participant_email == "pat@example.com"

    bookings = db_session.query(Booking).all()
    assert len(bookings) == 2
    assert len({b.venue_id for b in bookings}) == 2


def test_import_skips_expired_polls_and_orphans(client, admin_headers):
    past = (datetime.now(timezone.utc) - timedelta(hours=1)).isoformat()
    doc = {
        "version": 1,
        "polls": [
            {"id": "old", "title": "Old", "questions": [{"id": "q1", "text": "?"}], "expireAt": past},
            {"id": "new", "title": "New", "questions": [{"id": "q1", "text": "?"}], "expireAt": in_hours(5)},
        ],
        "submissions": [
            {"id": "s1", "poll": "old", "participantName": "A", "participantEmail": "a@example.com"},
            {"id": "s2", "poll": "new", "participantName": "B", "participantEmail": "b@example.com"},
            {"id": "s3", "poll": "ghost", "participantName": "C", "participantEmail": "c@example.com"},
        ],
        "venues": [],
        "bookings": [],
    }
    r = client.post("/auth/import-backup", json=doc, headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["imported"]["polls"] == 1
    assert body["imported"]["submissions"] == 1
    assert body["skipped"]["polls"] == 1
    assert body["skipped"]["submissions"] == 2


def test_import_requires_auth(client):
    assert client.post("/auth/import-backup", json={"version": 1}).status_code == 401


def test_delete_account_checks_password_and_phrase(client, admin_headers, make_poll):
    make_poll()
    r = client.post(
        "/auth/delete-account",
        json={"password": "wrong-password", "confirmation": "DELETE MY ACCOUNT"},
        headers=admin_headers,
    )
    assert r.status_code == 401

    r = client.post(
        "/auth/delete-account",
        json={"password": ADMIN["password"], "confirmation": "delete"},
        headers=admin_headers,
    )
    assert r.status_code == 400


def test_delete_account_removes_everything(client, admin_headers, make_poll, make_venue, db_session):
    poll = make_poll()
    client.post(f"/public/submit/{poll['id']}", json=SUBMISSION)
    venue = make_venue()
    client.post(f"/bookings/public/{venue['id']}/book", json=booking_body())
    client.put("/settings", json={"businessName": "Gone Soon"}, headers=admin_headers)

    r = client.post(
        "/auth/delete-account",
        json={"password": ADMIN["password"], "confirmation": "DELETE MY ACCOUNT"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    deleted = r.json()["deleted"]
    assert deleted["polls"] == 1
    assert deleted["submissions"] == 1
    assert deleted["venues"] == 1
    assert deleted["bookings"] == 1

    assert db_session.query(Poll).count() == 0
    assert db_session.query(Booking).count() == 0
    assert client.get("/auth/me", headers=admin_headers).status_code == 401
    assert client.get("/auth/check-setup").json() == {"isSetupComplete": False}
    assert client.get("/settings").json()["businessName"] == "MyEvents"
