from tests.conftest import ADMIN, STAFF, bearer


def test_check_setup_before_and_after(client):
    r = client.get("/auth/check-setup")
    assert r.status_code == 200
    assert r.json() == {"isSetupComplete": False}

    r = client.post("/auth/setup", json=ADMIN)
    assert r.status_code == 201
    body = r.json()
    assert body["token"]
    assert body["user"]["email"] == ADMIN["email"]
    assert body["user"]["role"] == "admin"
    assert "hashedPassword" not in body["user"]

    assert client.get("/auth/check-setup").json() == {"isSetupComplete": True}


def test_setup_only_once(client, admin_token):
    r = client.post("/auth/setup", json={**ADMIN, "email": "other@example.com"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Setup has already been completed"


def test_setup_rejects_short_password(client):
    r = client.post("/auth/setup", json={**ADMIN, "password": "abc"})
    assert r.status_code == 400
    assert "at least 6 characters" in r.json()["detail"]


def test_setup_rejects_bad_email(client):
    r = client.post("/auth/setup", json={**ADMIN, "email": "not-an-email"})
    assert r.status_code == 400


def test_login_and_me(client, admin_token):
    r = client.post("/auth/login", json={"email": "ADMIN@example.com", "password": ADMIN["password"]})
    assert r.status_code == 200
    token = r.json()["token"]

    r = client.get("/auth/me", headers=bearer(token))
    assert r.status_code == 200
    assert r.json()["name"] == ADMIN["name"]


def test_login_wrong_password(client, admin_token):
    r = client.post("/auth/login", json={"email": ADMIN["email"], "password": "wrong-password"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid credentials"


def test_protected_route_needs_token(client):
    r = client.get("/auth/me")
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authorized, no token"

    r = client.get("/auth/me", headers=bearer("garbage"))
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authorized, token failed"


def test_admin_creates_team_user(client, admin_headers):
    r = client.post("/auth/users", json=STAFF, headers=admin_headers)
    assert r.status_code == 201
    assert r.json()["role"] == "staff"

    r = client.post("/auth/users", json=STAFF, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "User already exists with this email"


def test_only_admin_creates_users(client, staff_headers):
    r = client.post(
        "/auth/users",
        json={**STAFF, "email": "third@example.com"},
        headers=staff_headers,
    )
    assert r.status_code == 403
    assert r.json()["detail"] == "Access denied. Admin only."
