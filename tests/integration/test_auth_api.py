"""
Integration tests for registration, sign-in and profile endpoints.
"""

from datetime import datetime, timedelta, timezone

from jose import jwt

from app.db.models.analytics_event import AnalyticsEvent


def register(client, student_id="S200", password="secret123", confirm=None, **overrides):
    body = {
        "name": "Rahul",
        "student_id": student_id,
        "university": "Nirma University",
        "password": password,
        "confirm_password": confirm if confirm is not None else password,
    }
    body.update(overrides)
    return client.post("/api/auth/register", json=body)


def test_register_returns_token_and_welcome_balance(client):
    resp = register(client)
    assert resp.status_code == 201
    data = resp.json()
    assert data["token_type"] == "bearer"
    assert data["is_new_user"] is True
    assert data["user"]["skill_coins"] == 100
    assert data["user"]["skills"] == []


def test_register_password_mismatch_is_rejected(client, db):
    resp = register(client, confirm="different1")
    assert resp.status_code == 422
    assert "Passwords do not match" in resp.text


def test_register_short_password_is_rejected(client):
    assert register(client, password="abc").status_code == 422


def test_register_blank_name_is_rejected(client):
    assert register(client, name="   ").status_code == 422


def test_register_duplicate(client):
    register(client)
    resp = register(client)
    assert resp.status_code == 409
    assert resp.json()["detail"] == "This student ID is already registered"


def test_login_and_me(client):
    register(client)
    resp = client.post("/api/auth/login", json={"student_id": "S200", "password": "secret123"})
    assert resp.status_code == 200
    token = resp.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["student_id"] == "S200"


def test_login_bad_password(client):
    register(client)
    resp = client.post("/api/auth/login", json={"student_id": "S200", "password": "nope-nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid student ID or password"


def test_session_state_is_anonymous_without_token(client):
    resp = client.get("/api/auth/session")
    assert resp.status_code == 200
    assert resp.json() == {"state": "anonymous", "user": None}


def test_session_state_authenticated(client, make_user, auth_headers):
    user = make_user()
    resp = client.get("/api/auth/session", headers=auth_headers(user))
    assert resp.json()["state"] == "authenticated"
    assert resp.json()["user"]["id"] == user.id


def test_protected_route_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/dashboard").status_code == 401


def test_logout_invalidates_token(client):
    token = register(client).json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    assert client.post("/api/auth/logout", headers=headers).status_code == 204
    assert client.get("/api/auth/me", headers=headers).status_code == 401


def test_provider_sign_in(client, db):
    id_token = jwt.encode(
        {"sub": "g-123", "name": "Meera", "email": "meera@example.com",
         "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "test-idp-secret",
        algorithm="HS256",
    )
    first = client.post("/api/auth/provider", json={"id_token": id_token})
    assert first.status_code == 200
    assert first.json()["is_new_user"] is True
    assert first.json()["user"]["skill_coins"] == 100

    second = client.post("/api/auth/provider", json={"id_token": id_token})
    assert second.json()["is_new_user"] is False

    names = [e.name for e in db.query(AnalyticsEvent).all()]
    assert "sign_up" in names and "login" in names


def test_profile_update_cleans_skills(client, make_user, auth_headers):
    user = make_user()
    resp = client.put(
        "/api/profile",
        json={"bio": "CS junior", "hourly_rate": 40, "skills": [" Python ", "Python", "", "SQL"]},
        headers=auth_headers(user),
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["skills"] == ["Python", "SQL"]
    assert data["hourly_rate"] == 40
    assert data["bio"] == "CS junior"


def test_profile_rejects_negative_rate(client, make_user, auth_headers):
    user = make_user()
    resp = client.put("/api/profile", json={"hourly_rate": -1}, headers=auth_headers(user))
    assert resp.status_code == 422


def test_admin_verifies_user(client, make_user, auth_headers):
    admin = make_user(role="admin")
    student = make_user()

    resp = client.post(f"/api/admin/users/{student.id}/verify", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.json()["is_verified"] is True

    forbidden = client.post(f"/api/admin/users/{admin.id}/verify", headers=auth_headers(student))
    assert forbidden.status_code == 403
