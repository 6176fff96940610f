# app/api/routes/profile.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import get_current_user
from app.db.base import get_db
from app.db.models.transaction import Transaction
from app.db.models.user import User
from app.schemas.transaction import TransactionResponse
from app.schemas.user import ProfileUpdate, UserResponse

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("", response_model=UserResponse)
def update_profile(
    update_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # Update fields one-by-one
    for field, value in update_data.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "university", "skills"):
            continue
        setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)
    return current_user


@router.get("/transactions", response_model=list[TransactionResponse])
def my_transactions(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return (
        db.query(Transaction)
        .filter(Transaction.user_id == current_user.id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        .all()
    )
