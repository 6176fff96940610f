# app/schemas/review.py
from pydantic import BaseModel, Field, conint
from typing import List, Optional
from datetime import datetime

QUICK_TAGS = [
    "Patient",
    "Clear",
    "Helpful",
    "Knowledgeable",
    "Punctual",
    "Encouraging",
    "Well-prepared",
    "Responsive",
]


class ReviewCreate(BaseModel):
    session_id: int
    rating: conint(ge=1, le=5) = Field(..., description="Rating 1-5")
    comment: Optional[str] = None
    tags: List[str] = []


class ReviewResponse(BaseModel):
    id: int
    session_id: int
    reviewer_id: int
    reviewer_name: Optional[str]
    reviewee_id: int
    type: str
    rating: int
    comment: Optional[str]
    tags: List[str]
    helpful: int
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
