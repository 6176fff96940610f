# app/api/routes/sessions.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import get_current_user
from app.db.base import get_db
from app.db.models.session_request import ACCEPTED, REJECTED, SessionRequest
from app.db.models.user import User
from app.schemas.session_request import SessionRequestCreate, SessionRequestResponse
from app.services.sessions import SessionWorkflow

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_participant_session(workflow: SessionWorkflow, session_id: int, user: User) -> SessionRequest:
    record = workflow.get(session_id)
    if user.id not in (record.student_id, record.tutor_id):
        raise HTTPException(status_code=403, detail="Not your session")
    return record


# Student requests a session

@router.post("", response_model=SessionRequestResponse, status_code=201)
def create_session_request(
    payload: SessionRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tutor = db.query(User).filter(User.id == payload.tutor_id).first()
    if not tutor:
        raise HTTPException(status_code=404, detail="Tutor not found")

    offered = payload.skill_coins_offered
    if offered is None:
        offered = tutor.hourly_rate if tutor.hourly_rate is not None else settings.DEFAULT_HOURLY_RATE
        if offered <= 0:
            raise HTTPException(status_code=400, detail="This tutor has no hourly rate; offer an amount of SkillCoins")

    workflow = SessionWorkflow(db)
    try:
        session_id = workflow.create(current_user.id, tutor.id, payload.skill, payload.problem, offered)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return workflow.get(session_id)


# Tutor views incoming pending requests

@router.get("/pending", response_model=list[SessionRequestResponse])
def pending_requests(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return SessionWorkflow(db).pending_for_tutor(current_user.id)


# All sessions where the caller is student or tutor

@router.get("/mine", response_model=list[SessionRequestResponse])
def my_sessions(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return SessionWorkflow(db).all_for_user(current_user.id)


@router.get("/{session_id}", response_model=SessionRequestResponse)
def get_session(session_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_participant_session(SessionWorkflow(db), session_id, current_user)


# Tutor accepts request

@router.post("/{session_id}/accept", response_model=SessionRequestResponse)
def accept_session(session_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    workflow = SessionWorkflow(db)
    record = _get_participant_session(workflow, session_id, current_user)
    if record.tutor_id != current_user.id:
        raise HTTPException(status_code=403, detail="Only the tutor can accept this request")
    return workflow.set_status(record.id, ACCEPTED)


# Tutor rejects request

@router.post("/{session_id}/reject", response_model=SessionRequestResponse)
def reject_session(session_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    workflow = SessionWorkflow(db)
    record = _get_participant_session(workflow, session_id, current_user)
    if record.tutor_id != current_user.id:
        raise HTTPException(status_code=403, detail="Only the tutor can reject this request")
    return workflow.set_status(record.id, REJECTED)


# Student confirms the session took place; coins move to the tutor

@router.post("/{session_id}/complete", response_model=SessionRequestResponse)
def complete_session(session_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    workflow = SessionWorkflow(db)
    record = _get_participant_session(workflow, session_id, current_user)
    if record.student_id != current_user.id:
        raise HTTPException(status_code=403, detail="Only the student can confirm completion")
    return workflow.complete(record.id, record.student_id, record.tutor_id, record.skill_coins_offered)
