# app/api/routes/admin.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional, List

from app.db.base import get_db
from app.db.models.user import User
from app.schemas.user import UserResponse
from app.core.security import require_admin
from app.services import analytics

router = APIRouter(prefix="/admin", tags=["admin"])


# -------------------------
# 1. List users (filterable)
# -------------------------
@router.get("/users", response_model=List[UserResponse])
def list_users(
    verified: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    q = db.query(User)
    if verified is not None:
        q = q.filter(User.is_verified == verified)

    offset = (page - 1) * per_page
    return q.order_by(User.id).offset(offset).limit(per_page).all()


# --------------------------------------------------
# 2. Verify / unverify a student
# --------------------------------------------------
@router.post("/users/{user_id}/verify", response_model=UserResponse)
def verify_user(
    user_id: int,
    verified: bool = Query(True),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    u = db.query(User).filter(User.id == user_id).first()
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    u.is_verified = bool(verified)
    db.commit()
    db.refresh(u)

    analytics.log_verification_attempt(u.is_verified)
    return u
