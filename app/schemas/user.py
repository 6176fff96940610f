# app/schemas/user.py
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime

MIN_PASSWORD_LENGTH = 6


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    student_id: str = Field(..., min_length=1)
    university: str = Field(..., min_length=1)
    password: str
    confirm_password: str

    @field_validator("name", "student_id", "university")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please fill in all fields")
        return v.strip()

    @model_validator(mode="after")
    def check_passwords(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return self


class UserResponse(BaseModel):
    id: int
    student_id: Optional[str]
    email: Optional[str]
    name: str
    university: str
    role: str
    photo_url: Optional[str]
    bio: Optional[str]
    skills: List[str]
    hourly_rate: Optional[int]
    skill_coins: int
    is_verified: bool
    avg_rating: Optional[float]
    rating_count: int
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    university: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    hourly_rate: Optional[int] = Field(default=None, ge=0)
    skills: Optional[List[str]] = None

    @field_validator("skills")
    @classmethod
    def clean_skills(cls, v):
        if v is None:
            return v
        cleaned = []
        for skill in v:
            skill = skill.strip()
            if skill and skill not in cleaned:
                cleaned.append(skill)
        return cleaned

    @field_validator("name", "university")
    @classmethod
    def not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("must not be empty")
        return v.strip() if v is not None else v
