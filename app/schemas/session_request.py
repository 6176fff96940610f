# app/schemas/session_request.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


# --- CREATE ---
class SessionRequestCreate(BaseModel):
    tutor_id: int
    skill: str = Field(..., min_length=1)
    problem: str = Field(..., min_length=1)
    skill_coins_offered: Optional[int] = Field(
        default=None, gt=0, description="Defaults to the tutor's hourly rate"
    )


# --- RESPONSE ---
class SessionRequestResponse(BaseModel):
    id: int
    student_id: int
    student_name: Optional[str]
    tutor_id: int
    tutor_name: Optional[str]
    skill: str
    problem: str
    skill_coins_offered: int
    status: str
    safe_zone_id: Optional[str]
    checked_in_at: Optional[datetime]
    completed_at: Optional[datetime]
    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
