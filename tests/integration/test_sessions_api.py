"""
Integration tests for booking, the session lifecycle, reviews and the dashboard.
"""

import pytest


@pytest.fixture
def people(make_user):
    student = make_user(name="Asha", skill_coins=100)
    tutor = make_user(name="Ben", skills=["Python"], skill_coins=0, hourly_rate=30)
    return student, tutor


def book(client, headers, tutor_id, amount=50):
    body = {"tutor_id": tutor_id, "skill": "Python", "problem": "help with python loops"}
    if amount is not None:
        body["skill_coins_offered"] = amount
    return client.post("/api/sessions", json=body, headers=headers)


def test_full_lifecycle_moves_coins(client, db, people, auth_headers):
    student, tutor = people
    sh, th = auth_headers(student), auth_headers(tutor)

    created = book(client, sh, tutor.id, amount=50)
    assert created.status_code == 201
    session_id = created.json()["id"]
    assert created.json()["status"] == "pending"

    pending = client.get("/api/sessions/pending", headers=th).json()
    assert [s["id"] for s in pending] == [session_id]

    assert client.post(f"/api/sessions/{session_id}/accept", headers=th).json()["status"] == "accepted"
    done = client.post(f"/api/sessions/{session_id}/complete", headers=sh)
    assert done.status_code == 200
    assert done.json()["status"] == "completed"

    db.refresh(student)
    db.refresh(tutor)
    assert student.skill_coins == 50
    assert tutor.skill_coins == 50


def test_offer_defaults_to_tutor_rate(client, people, auth_headers):
    student, tutor = people
    resp = book(client, auth_headers(student), tutor.id, amount=None)
    assert resp.json()["skill_coins_offered"] == 30


def test_default_offer_with_zero_rate_tutor_needs_explicit_amount(client, make_user, auth_headers):
    student = make_user()
    tutor = make_user(hourly_rate=0)
    assert client.get(f"/api/tutors/{tutor.id}").json()["hourly_rate"] == 0

    resp = book(client, auth_headers(student), tutor.id, amount=None)
    assert resp.status_code == 400
    assert book(client, auth_headers(student), tutor.id, amount=5).status_code == 201


def test_zero_offer_is_rejected(client, people, auth_headers):
    student, tutor = people
    assert book(client, auth_headers(student), tutor.id, amount=0).status_code == 422


def test_cannot_book_yourself(client, people, auth_headers):
    student, _ = people
    assert book(client, auth_headers(student), student.id).status_code == 400


def test_only_tutor_can_accept(client, people, auth_headers):
    student, tutor = people
    session_id = book(client, auth_headers(student), tutor.id).json()["id"]
    assert client.post(f"/api/sessions/{session_id}/accept", headers=auth_headers(student)).status_code == 403


def test_outsider_cannot_see_session(client, people, make_user, auth_headers):
    student, tutor = people
    outsider = make_user()
    session_id = book(client, auth_headers(student), tutor.id).json()["id"]
    assert client.get(f"/api/sessions/{session_id}", headers=auth_headers(outsider)).status_code == 403


def test_completing_pending_session_conflicts(client, people, auth_headers):
    student, tutor = people
    session_id = book(client, auth_headers(student), tutor.id).json()["id"]
    resp = client.post(f"/api/sessions/{session_id}/complete", headers=auth_headers(student))
    assert resp.status_code == 409


def test_rejected_session_cannot_be_accepted(client, people, auth_headers):
    student, tutor = people
    th = auth_headers(tutor)
    session_id = book(client, auth_headers(student), tutor.id).json()["id"]
    client.post(f"/api/sessions/{session_id}/reject", headers=th)
    assert client.post(f"/api/sessions/{session_id}/accept", headers=th).status_code == 409


def test_insufficient_balance_returns_402(client, make_user, auth_headers):
    student = make_user(skill_coins=10)
    tutor = make_user(skill_coins=0)
    session_id = book(client, auth_headers(student), tutor.id, amount=50).json()["id"]
    client.post(f"/api/sessions/{session_id}/accept", headers=auth_headers(tutor))

    resp = client.post(f"/api/sessions/{session_id}/complete", headers=auth_headers(student))
    assert resp.status_code == 402
    assert client.get(f"/api/sessions/{session_id}", headers=auth_headers(student)).json()["status"] == "accepted"


def test_unknown_session_is_404(client, people, auth_headers):
    student, _ = people
    assert client.get("/api/sessions/999", headers=auth_headers(student)).status_code == 404


def complete_session(client, student, tutor, auth_headers, amount=20):
    session_id = book(client, auth_headers(student), tutor.id, amount=amount).json()["id"]
    client.post(f"/api/sessions/{session_id}/accept", headers=auth_headers(tutor))
    client.post(f"/api/sessions/{session_id}/complete", headers=auth_headers(student))
    return session_id


def test_review_after_completion_updates_rating(client, people, auth_headers):
    student, tutor = people
    session_id = complete_session(client, student, tutor, auth_headers)

    resp = client.post(
        "/api/reviews",
        json={"session_id": session_id, "rating": 4, "comment": "Great", "tags": ["Patient", " "]},
        headers=auth_headers(student),
    )
    assert resp.status_code == 201
    assert resp.json()["type"] == "tutor"
    assert resp.json()["tags"] == ["Patient"]

    listing = client.get(f"/api/tutors/{tutor.id}").json()
    assert listing["rating"] == 4.0

    duplicate = client.post(
        "/api/reviews", json={"session_id": session_id, "rating": 5}, headers=auth_headers(student)
    )
    assert duplicate.status_code == 400


def test_review_requires_completed_session(client, people, auth_headers):
    student, tutor = people
    session_id = book(client, auth_headers(student), tutor.id).json()["id"]
    resp = client.post("/api/reviews", json={"session_id": session_id, "rating": 5}, headers=auth_headers(student))
    assert resp.status_code == 400


def test_review_rating_out_of_range(client, people, auth_headers):
    student, tutor = people
    session_id = complete_session(client, student, tutor, auth_headers)
    resp = client.post("/api/reviews", json={"session_id": session_id, "rating": 6}, headers=auth_headers(student))
    assert resp.status_code == 422


def test_helpful_vote(client, people, auth_headers):
    student, tutor = people
    session_id = complete_session(client, student, tutor, auth_headers)
    review_id = client.post(
        "/api/reviews", json={"session_id": session_id, "rating": 5}, headers=auth_headers(tutor)
    ).json()["id"]

    resp = client.post(f"/api/reviews/{review_id}/helpful", headers=auth_headers(student))
    assert resp.json()["helpful"] == 1
    reviews = client.get(f"/api/reviews/user/{student.id}").json()
    assert [r["id"] for r in reviews] == [review_id]


def test_dashboard_stats(client, people, auth_headers):
    student, tutor = people
    complete_session(client, student, tutor, auth_headers, amount=20)
    book(client, auth_headers(student), tutor.id, amount=10)

    tutor_view = client.get("/api/dashboard", headers=auth_headers(tutor)).json()
    assert tutor_view["stats"]["skill_coins"] == 20
    assert tutor_view["stats"]["coins_earned"] == 20
    assert tutor_view["stats"]["sessions_as_tutor"] == 2
    assert tutor_view["stats"]["completed_sessions"] == 1
    assert len(tutor_view["pending_requests"]) == 1

    student_view = client.get("/api/dashboard", headers=auth_headers(student)).json()
    assert student_view["stats"]["coins_spent"] == 20
    assert student_view["stats"]["skill_coins"] == 80
    assert len(student_view["sessions"]) == 2


def test_transactions_listing(client, people, auth_headers):
    student, tutor = people
    complete_session(client, student, tutor, auth_headers, amount=20)
    rows = client.get("/api/profile/transactions", headers=auth_headers(tutor)).json()
    assert [(r["type"], r["amount"]) for r in rows] == [("earned", 20)]
