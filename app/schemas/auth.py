# app/schemas/auth.py
from pydantic import BaseModel, Field
from typing import Optional

from app.schemas.user import UserResponse


class LoginRequest(BaseModel):
    student_id: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProviderSignInRequest(BaseModel):
    id_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
    is_new_user: bool = False


class AuthSessionResponse(BaseModel):
    state: str  # unknown | authenticated | anonymous
    user: Optional[UserResponse] = None
