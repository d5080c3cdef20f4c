# tests/conftest.py
import os
import tempfile

# Settings and the engine are built at import time, so point them at a throwaway DB first
_tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
_tmp.close()
os.environ["DATABASE_URL"] = f"sqlite:///{_tmp.name}"
os.environ["EXPIRY_SWEEP_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["CLIENT_URL"] = "http://localhost:5173"

from datetime import date, datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402

ADMIN = {
    "name": "Ada Admin",
    "email": "admin@example.com",
    "password": "secret123",
    "businessName": "Ada's Bistro",
    "businessType": "restaurant",
}
STAFF = {
    "name": "Sam Staff",
    "email": "staff@example.com",
    "password": "secret456",
    "role": "staff",
}


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def in_hours(hours: float) -> str:
    return (datetime.now(timezone.utc) + timedelta(hours=hours)).isoformat()


def next_week() -> str:
    return (date.today() + timedelta(days=7)).isoformat()


@pytest.fixture(scope="function", autouse=True)
def fresh_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_token(client):
    r = client.post("/auth/setup", json=ADMIN)
    assert r.status_code == 201, r.text
    return r.json()["token"]


@pytest.fixture
def admin_headers(admin_token):
    return bearer(admin_token)


@pytest.fixture
def staff_headers(client, admin_headers):
    r = client.post("/auth/users", json=STAFF, headers=admin_headers)
    assert r.status_code == 201, r.text
    r = client.post("/auth/login", json={"email": STAFF["email"], "password": STAFF["password"]})
    assert r.status_code == 200, r.text
    return bearer(r.json()["token"])


# —— Factories ——
@pytest.fixture
def make_poll(client, admin_headers):
    def _make_poll(headers=None, expire_at=None, consent_enabled=False, title="Lunch vote"):
        body = {
            "title": title,
            "description": "Where should we eat?",
            "questions": [
                {"id": "q1", "text": "Pick a place", "type": "button", "options": ["Pizza", "Sushi"]},
                {"id": "q2", "text": "Anything else?", "type": "text"},
            ],
            "expireAt": expire_at or in_hours(1),
            "consentEnabled": consent_enabled,
            "consentText": "I agree to be contacted" if consent_enabled else None,
        }
        r = client.post("/polls", json=body, headers=headers or admin_headers)
        assert r.status_code == 201, r.text
        return r.json()["poll"]
    return _make_poll


@pytest.fixture
def make_venue(client, admin_headers):
    def _make_venue(headers=None, name="Main Hall"):
        body = {
            "name": name,
            "description": "Ground floor",
            "venueType": "Dinner",
            "tables": [
                {"tableNumber": "T1", "capacity": 4, "position": {"x": 10, "y": 20}, "shape": "square"},
                {"tableNumber": "T2", "capacity": 2, "shape": "circle"},
            ],
            "timeSlots": [{"name": "Evening", "startTime": "18:00", "endTime": "20:00"}],
        }
        r = client.post("/booking-venues", json=body, headers=headers or admin_headers)
        assert r.status_code == 201, r.text
        return r.json()["venue"]
    return _make_venue


def booking_body(table="T1", day=None, guest="Grace Guest", guests=2):
    return {
        "tableNumber": table,
        "date": day or next_week(),
        "timeSlot": {"name": "Evening", "startTime": "18:00", "endTime": "20:00"},
        "guestName": guest,
        "guestEmail": "grace@example.com",
        "guestPhone": "+1 555 0100",
        "numberOfGuests": guests,
    }
