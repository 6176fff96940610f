# app/schemas/tutor.py
from pydantic import BaseModel
from typing import List, Optional


class TutorListing(BaseModel):
    id: int
    name: str
    university: str
    skills: List[str]
    rating: float
    hourly_rate: int
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    is_verified: bool = False


class MatchResponse(BaseModel):
    query: str
    tutors: List[TutorListing]
    confidence: float
    source: str  # "ai" | "fallback"
    reasoning: Optional[str] = None
