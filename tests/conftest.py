"""
Pytest configuration and shared fixtures.

The environment is fixed before ``app`` is imported so that settings,
the engine and the session factory all point at a throwaway SQLite file
with every optional external service switched off.

Fixtures:
---------
- db: SQLAlchemy session on the test database (schema recreated per test)
- client: FastAPI TestClient with the generative client replaced by ``fake_llm``
- fake_llm: scripted stand-in for the generative text API
- make_user: factory for stored profiles
- auth_headers: bearer headers for a stored profile
"""

import os
import tempfile
from pathlib import Path

TEST_DB = Path(tempfile.gettempdir()) / "skillswitch_test.db"

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["IDENTITY_PROVIDER_SECRET"] = "test-idp-secret"
os.environ["GENAI_API_KEY"] = ""
os.environ["MAPS_API_KEY"] = ""
os.environ["ANALYTICS_ENABLED"] = "true"
os.environ["LOG_LEVEL"] = "DEBUG"

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import FeatureUnavailable
from app.core.security import create_access_token, hash_password
from app.db.base import Base, SessionLocal, engine
from app.db.models.user import User
from app.main import app
from app.services.llm import GenerationError, get_generative_client


class FakeGenerativeClient:
    """Records prompts and answers with a scripted reply or error."""

    def __init__(self):
        self.enabled = True
        self.reply = None
        self.error = None
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.enabled:
            raise FeatureUnavailable("AI service is not configured")
        if self.error is not None:
            raise self.error
        if self.reply is None:
            raise GenerationError("no scripted reply")
        return self.reply


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_llm():
    return FakeGenerativeClient()


@pytest.fixture
def client(fake_llm):
    app.dependency_overrides[get_generative_client] = lambda: fake_llm
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(name=None, skills=None, skill_coins=100, hourly_rate=None, role="student", password="secret123"):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            student_id=f"S{n:04d}",
            name=name or f"Student {n}",
            university="Test University",
            password_hash=hash_password(password),
            role=role,
            skills=list(skills or []),
            skill_coins=skill_coins,
            hourly_rate=hourly_rate,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers
