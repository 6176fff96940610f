# app/api/routes/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.security import get_current_user
from app.db.base import get_db
from app.db.models import transaction as ledger
from app.db.models.session_request import COMPLETED, SessionRequest
from app.db.models.transaction import Transaction
from app.db.models.user import User
from app.schemas.dashboard import DashboardResponse, DashboardStats
from app.schemas.session_request import SessionRequestResponse
from app.services.sessions import SessionWorkflow

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _ledger_total(db: Session, user_id: int, tx_type: str) -> int:
    return db.query(func.coalesce(func.sum(Transaction.amount), 0)).filter(
        Transaction.user_id == user_id, Transaction.type == tx_type
    ).scalar() or 0


@router.get("", response_model=DashboardResponse)
def dashboard(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    uid = current_user.id
    workflow = SessionWorkflow(db)

    # --- Overview ---
    as_student = db.query(func.count(SessionRequest.id)).filter(SessionRequest.student_id == uid).scalar() or 0
    as_tutor = db.query(func.count(SessionRequest.id)).filter(SessionRequest.tutor_id == uid).scalar() or 0
    completed = workflow.involving(uid).filter(SessionRequest.status == COMPLETED).count()

    stats = DashboardStats(
        skill_coins=current_user.skill_coins,
        sessions_as_student=int(as_student),
        sessions_as_tutor=int(as_tutor),
        completed_sessions=int(completed),
        coins_earned=int(_ledger_total(db, uid, ledger.EARNED)),
        coins_spent=int(_ledger_total(db, uid, ledger.SPENT)),
    )

    return DashboardResponse(
        stats=stats,
        pending_requests=[SessionRequestResponse.model_validate(s) for s in workflow.pending_for_tutor(uid)],
        sessions=[SessionRequestResponse.model_validate(s) for s in workflow.all_for_user(uid)],
    )
