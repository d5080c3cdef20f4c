from app.models.booking import Booking, BookingVenue
from app.models.poll import Poll
from app.models.user import User
from app.services.access import authorize
from tests.conftest import booking_body


def test_other_user_cannot_touch_poll(client, admin_headers, staff_headers, make_poll):
    poll = make_poll()

    assert client.get(f"/polls/{poll['id']}", headers=staff_headers).status_code == 403
    assert client.put(f"/polls/{poll['id']}", json={"title": "Mine now"}, headers=staff_headers).status_code == 403
    assert client.delete(f"/polls/{poll['id']}", headers=staff_headers).status_code == 403
    assert client.get(f"/results/{poll['id']}", headers=staff_headers).status_code == 403
    assert client.get("/polls", headers=staff_headers).json()["polls"] == []

    # Still intact for the owner
    assert client.get(f"/polls/{poll['id']}", headers=admin_headers).json()["poll"]["title"] == "Lunch vote"


def test_other_user_cannot_touch_venue_or_bookings(client, staff_headers, make_venue):
    venue = make_venue()
    booking = client.post(f"/bookings/public/{venue['id']}/book", json=booking_body()).json()["booking"]

    assert client.put(f"/booking-venues/{venue['id']}", json={"name": "Taken"}, headers=staff_headers).status_code == 403
    assert client.delete(f"/booking-venues/{venue['id']}", headers=staff_headers).status_code == 403
    assert client.get(f"/booking-venues/{venue['id']}/qrcode", headers=staff_headers).status_code == 403
    assert client.get(f"/bookings/venue/{venue['id']}", headers=staff_headers).status_code == 403
    assert client.put(f"/bookings/admin/{booking['id']}/confirm", headers=staff_headers).status_code == 403
    assert client.delete(f"/bookings/admin/{booking['id']}", headers=staff_headers).status_code == 403

    assert client.get("/booking-venues", headers=staff_headers).json()["venues"] == []
    assert client.get("/bookings/admin/all", headers=staff_headers).json()["bookings"] == []


def test_missing_resource_is_not_found_before_forbidden(client, staff_headers):
    assert client.get("/polls/missing", headers=staff_headers).status_code == 404
    assert client.get("/booking-venues/missing", headers=staff_headers).status_code == 404
    assert client.put("/bookings/admin/missing/cancel", headers=staff_headers).status_code == 404


def test_authorize_follows_booking_to_venue_owner():
    owner = User(id="u-1", name="Owner", email="o@example.com", hashed_password="x")
    stranger = User(id="u-2", name="Stranger", email="s@example.com", hashed_password="x")
    venue = BookingVenue(id="v-1", user_id=owner.id, name="Hall", venue_type="Dinner")
    booking = Booking(id="b-1", venue=venue, table_number="T1")
    poll = Poll(id="p-1", user_id=owner.id, title="Vote")

    assert authorize(owner, poll)
    assert not authorize(stranger, poll)
    assert authorize(owner, booking)
    assert not authorize(stranger, booking)
