# app/api/routes/tutors.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional, List

from app.db.base import get_db
from app.db.models.user import User
from app.schemas.tutor import MatchResponse, TutorListing
from app.core.security import get_current_user
from app.services import analytics
from app.services.llm import GenerativeClient, get_generative_client
from app.services.ranking import FALLBACK_NO_MATCH_CONFIDENCE, SOURCE_FALLBACK, TutorRanker
from app.services.tutors import fetch_all_tutors, fetch_tutor_by_id

router = APIRouter(prefix="/tutors", tags=["tutors"])


@router.get("", response_model=List[TutorListing])
def list_tutors(
    skill: Optional[str] = Query(None, description="case-insensitive skill tag filter"),
    db: Session = Depends(get_db),
):
    tutors = fetch_all_tutors(db)
    if skill:
        wanted = skill.strip().lower()
        tutors = [t for t in tutors if any(s.lower() == wanted for s in t.skills)]
    return tutors


# Ranks every other student for a free-text problem description.
# Clients debounce typing; an older in-flight request is not cancelled.
@router.get("/match", response_model=MatchResponse)
def match_tutors(
    q: str = Query("", description="Problem description"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: GenerativeClient = Depends(get_generative_client),
):
    candidates = fetch_all_tutors(db, exclude_user_id=current_user.id)
    query = q.strip()

    if not query:
        return MatchResponse(
            query="", tutors=candidates, confidence=FALLBACK_NO_MATCH_CONFIDENCE, source=SOURCE_FALLBACK
        )

    result = TutorRanker(client).rank(query, candidates)
    analytics.log_tutor_search(query, len(result.tutors))

    return MatchResponse(
        query=query,
        tutors=result.tutors,
        confidence=result.confidence,
        source=result.source,
        reasoning=result.reasoning,
    )


@router.get("/{tutor_id}", response_model=TutorListing)
def get_tutor(tutor_id: int, db: Session = Depends(get_db)):
    tutor = fetch_tutor_by_id(db, tutor_id)
    if not tutor:
        raise HTTPException(status_code=404, detail="Tutor not found")
    return tutor
