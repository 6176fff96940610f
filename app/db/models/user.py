# app/db/models/user.py
from sqlalchemy import JSON, Boolean, CheckConstraint, Column, DateTime, Float, Integer, String, func
from app.db.base import Base


class User(Base):
    """
    Student profile. Every student can both learn and tutor; the tutor
    listing is derived from this row on each fetch.
    """
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("skill_coins >= 0", name="ck_users_skill_coins_non_negative"),
        CheckConstraint("hourly_rate >= 0", name="ck_users_hourly_rate_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(String, unique=True, index=True, nullable=True)
    email = Column(String, unique=True, index=True, nullable=True)
    name = Column(String, nullable=False)
    university = Column(String, nullable=False, default="", server_default="")
    password_hash = Column(String, nullable=True)  # null for provider-only accounts
    role = Column(String, nullable=False, default="student", server_default="student")

    # upstream identity provider (e.g. "google") and its subject id
    auth_provider = Column(String, nullable=True)
    provider_uid = Column(String, unique=True, index=True, nullable=True)

    photo_url = Column(String, nullable=True)
    bio = Column(String, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    hourly_rate = Column(Integer, nullable=True)

    skill_coins = Column(Integer, nullable=False, default=0)
    is_verified = Column(Boolean, nullable=False, default=False)

    avg_rating = Column(Float, nullable=True)
    rating_count = Column(Integer, nullable=False, default=0)

    # bumped on sign-out; tokens carrying an older version are rejected
    token_version = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
