# app/schemas/dashboard.py
from pydantic import BaseModel
from typing import List

from app.schemas.session_request import SessionRequestResponse


class DashboardStats(BaseModel):
    skill_coins: int
    sessions_as_student: int
    sessions_as_tutor: int
    completed_sessions: int
    coins_earned: int
    coins_spent: int


class DashboardResponse(BaseModel):
    stats: DashboardStats
    pending_requests: List[SessionRequestResponse]
    sessions: List[SessionRequestResponse]
