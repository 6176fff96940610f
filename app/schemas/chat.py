# app/schemas/chat.py
from pydantic import BaseModel, Field
from typing import List, Literal


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    history: List[ChatTurn] = []


class ChatResponse(BaseModel):
    reply: str


class SuggestionsResponse(BaseModel):
    suggestions: List[str]
