# app/api/routes/chat.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.security import get_current_user
from app.db.base import get_db
from app.db.models.session_request import SessionRequest
from app.db.models.user import User
from app.schemas.chat import ChatRequest, ChatResponse, SuggestionsResponse
from app.services.llm import (
    CHAT_ERROR_MESSAGE,
    GenerationError,
    GenerativeClient,
    generate_chat_response,
    generate_smart_suggestions,
    get_generative_client,
)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
def chat(
    payload: ChatRequest,
    current_user: User = Depends(get_current_user),
    client: GenerativeClient = Depends(get_generative_client),
):
    # FeatureUnavailable (no key) is turned into a 503 by the app-level handler
    try:
        reply = generate_chat_response(client, payload.message, [t.model_dump() for t in payload.history])
    except GenerationError:
        raise HTTPException(status_code=502, detail=CHAT_ERROR_MESSAGE)
    return ChatResponse(reply=reply)


@router.get("/suggestions", response_model=SuggestionsResponse)
def suggestions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: GenerativeClient = Depends(get_generative_client),
):
    recent = (
        db.query(SessionRequest.problem)
        .filter(SessionRequest.student_id == current_user.id)
        .order_by(SessionRequest.created_at.desc())
        .limit(5)
        .all()
    )
    problems = [row[0] for row in recent]
    return SuggestionsResponse(
        suggestions=generate_smart_suggestions(client, current_user.skills or [], problems)
    )
