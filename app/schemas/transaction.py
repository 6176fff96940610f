# app/schemas/transaction.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class TransactionResponse(BaseModel):
    id: int
    user_id: int
    type: str
    amount: int
    description: str
    session_id: Optional[int]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
