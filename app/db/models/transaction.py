# app/db/models/transaction.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from app.db.base import Base

EARNED = "earned"
SPENT = "spent"
BONUS = "bonus"


class Transaction(Base):
    """SkillCoin ledger entry. amount is always positive; type gives the direction."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    description = Column(String, nullable=False, default="")
    session_id = Column(Integer, ForeignKey("session_requests.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
