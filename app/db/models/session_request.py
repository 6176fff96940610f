# app/db/models/session_request.py
from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.db.base import Base

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"
COMPLETED = "completed"

SESSION_STATUSES = (PENDING, ACCEPTED, REJECTED, COMPLETED)


class SessionRequest(Base):
    __tablename__ = "session_requests"
    __table_args__ = (
        CheckConstraint("skill_coins_offered > 0", name="ck_session_requests_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)

    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    tutor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    student_name = Column(String, nullable=True)
    tutor_name = Column(String, nullable=True)

    skill = Column(String, nullable=False)
    problem = Column(String, nullable=False)
    skill_coins_offered = Column(Integer, nullable=False)  # fixed at creation

    status = Column(String, nullable=False, default=PENDING, index=True)

    # in-person meeting, filled on safe-zone check-in
    safe_zone_id = Column(String, nullable=True)
    checked_in_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # relationships
    student = relationship("User", foreign_keys=[student_id])
    tutor = relationship("User", foreign_keys=[tutor_id])
