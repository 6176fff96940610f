"""
Unit tests for the per-request authentication context.
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.exceptions import AlreadyRegistered, InvalidCredentials
from app.core.security import create_access_token, user_from_token
from app.db.base import SessionLocal
from app.db.models.transaction import Transaction
from app.db.models.user import User
from app.schemas.user import UserCreate
from app.services.auth import AuthContext, AuthState


def registration(student_id="S100", password="secret123"):
    return UserCreate(
        name="Priya",
        student_id=student_id,
        university="Gujarat University",
        password=password,
        confirm_password=password,
    )


def provider_token(sub="google-uid-1", secret="test-idp-secret", **claims):
    payload = {
        "sub": sub,
        "email": "priya@example.com",
        "name": "Priya G",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


def test_starts_unknown(db):
    assert AuthContext(db).state == AuthState.UNKNOWN


def test_resolve_without_token_is_anonymous(db):
    ctx = AuthContext(db).resolve(None)
    assert ctx.state == AuthState.ANONYMOUS
    assert ctx.current_user is None


def test_resolve_with_garbage_token_is_anonymous(db):
    assert AuthContext(db).resolve("not-a-jwt").state == AuthState.ANONYMOUS


def test_register_grants_welcome_bonus(db):
    ctx = AuthContext(db)
    user, token = ctx.register(registration())

    assert ctx.state == AuthState.AUTHENTICATED
    assert user.skill_coins == 100
    assert user.skills == []
    assert user.is_verified is False
    assert user_from_token(db, token).id == user.id

    bonus = db.query(Transaction).filter(Transaction.user_id == user.id).one()
    assert (bonus.type, bonus.amount) == ("bonus", 100)


def test_register_duplicate_student_id(db):
    AuthContext(db).register(registration())
    with pytest.raises(AlreadyRegistered):
        AuthContext(db).register(registration())


def test_sign_in_with_credentials(db):
    AuthContext(db).register(registration())
    ctx = AuthContext(db)
    user, _ = ctx.sign_in_with_credentials("S100", "secret123")
    assert ctx.is_authenticated
    assert user.student_id == "S100"


def test_sign_in_wrong_password(db):
    AuthContext(db).register(registration())
    ctx = AuthContext(db)
    with pytest.raises(InvalidCredentials):
        ctx.sign_in_with_credentials("S100", "wrong-pass")
    assert ctx.state == AuthState.UNKNOWN


def test_provider_sign_in_provisions_once(db):
    user, _, is_new = AuthContext(db).sign_in_with_provider(provider_token())
    assert is_new is True
    assert user.skill_coins == 100
    assert user.skills == []
    assert user.name == "Priya G"
    assert user.auth_provider == "google"

    again, _, is_new_again = AuthContext(db).sign_in_with_provider(provider_token())
    assert is_new_again is False
    assert again.id == user.id
    assert db.query(Transaction).filter(Transaction.user_id == user.id).count() == 1


def test_provider_token_with_wrong_signature(db):
    with pytest.raises(InvalidCredentials):
        AuthContext(db).sign_in_with_provider(provider_token(secret="someone-else"))


def test_sign_out_revokes_outstanding_tokens(db):
    ctx = AuthContext(db)
    user, token = ctx.register(registration())

    ctx.sign_out()

    assert ctx.state == AuthState.ANONYMOUS
    assert ctx.current_user is None
    assert user_from_token(db, token) is None
    assert user_from_token(db, create_access_token(user)) is not None


def test_refresh_reloads_profile(db):
    ctx = AuthContext(db)
    user, _ = ctx.register(registration())

    other = SessionLocal()
    try:
        other.query(User).filter(User.id == user.id).update({"skill_coins": 42})
        other.commit()
    finally:
        other.close()

    assert ctx.refresh().skill_coins == 42
