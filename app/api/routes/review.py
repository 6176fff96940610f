# app/api/routes/review.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from app.db.base import get_db
from app.db.models.review import Review
from app.db.models.session_request import COMPLETED, SessionRequest
from app.db.models.user import User
from app.schemas.review import QUICK_TAGS, ReviewCreate, ReviewResponse
from app.core.security import get_current_user

router = APIRouter(prefix="/reviews", tags=["reviews"])


# Helper: recalc reviewee aggregates
def _recalculate_rating(db: Session, user: User):
    rows = db.query(Review).filter(Review.reviewee_id == user.id).all()
    total = len(rows)
    if total == 0:
        user.avg_rating = None
        user.rating_count = 0
    else:
        user.avg_rating = float(sum(r.rating for r in rows)) / total
        user.rating_count = total
    db.add(user)
    db.commit()


# Create review (either participant of a completed session)
@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(review_in: ReviewCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    session = db.query(SessionRequest).filter(SessionRequest.id == review_in.session_id).first()
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    if current_user.id == session.student_id:
        reviewee_id, review_type = session.tutor_id, "tutor"
    elif current_user.id == session.tutor_id:
        reviewee_id, review_type = session.student_id, "student"
    else:
        raise HTTPException(status_code=403, detail="Session does not belong to you")

    if session.status != COMPLETED:
        raise HTTPException(status_code=400, detail="Can only review completed sessions")

    existing = db.query(Review).filter(
        Review.session_id == session.id, Review.reviewer_id == current_user.id
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail="You already reviewed this session")

    reviewee = db.query(User).filter(User.id == reviewee_id).first()
    if not reviewee:
        raise HTTPException(status_code=404, detail="User not found")

    review = Review(
        session_id=session.id,
        reviewer_id=current_user.id,
        reviewer_name=current_user.name,
        reviewee_id=reviewee.id,
        type=review_type,
        rating=review_in.rating,
        comment=review_in.comment,
        tags=[t.strip() for t in review_in.tags if t.strip()],
    )

    db.add(review)
    db.commit()
    db.refresh(review)

    _recalculate_rating(db, reviewee)

    return review


# List reviews about a user (public)
@router.get("/user/{user_id}", response_model=List[ReviewResponse])
def list_user_reviews(user_id: int, db: Session = Depends(get_db)):
    return (
        db.query(Review)
        .filter(Review.reviewee_id == user_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


@router.post("/{review_id}/helpful", response_model=ReviewResponse)
def mark_helpful(review_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    review = db.query(Review).filter(Review.id == review_id).first()
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")

    review.helpful = Review.helpful + 1
    db.commit()
    db.refresh(review)
    return review


# Suggested tags for the review form
@router.get("/tags", response_model=List[str])
def quick_tags():
    return QUICK_TAGS
