# app/services/tutors.py
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.models.user import User
from app.schemas.tutor import TutorListing

DEFAULT_TUTOR_RATING = 4.5


def to_listing(user: User) -> TutorListing:
    return TutorListing(
        id=user.id,
        name=user.name or "Unknown",
        university=user.university or "Unknown University",
        skills=list(user.skills or []),
        rating=float(user.avg_rating) if user.rating_count and user.avg_rating is not None else DEFAULT_TUTOR_RATING,
        hourly_rate=user.hourly_rate if user.hourly_rate is not None else settings.DEFAULT_HOURLY_RATE,
        photo_url=user.photo_url,
        bio=user.bio,
        is_verified=bool(user.is_verified),
    )


def fetch_all_tutors(db: Session, exclude_user_id: Optional[int] = None) -> List[TutorListing]:
    # every profile is listed, even without skills yet
    q = db.query(User).filter(User.role != "admin")
    if exclude_user_id is not None:
        q = q.filter(User.id != exclude_user_id)
    return [to_listing(u) for u in q.order_by(User.id).all()]


def fetch_tutor_by_id(db: Session, tutor_id: int) -> Optional[TutorListing]:
    user = db.query(User).filter(User.id == tutor_id, User.role != "admin").first()
    return to_listing(user) if user else None
