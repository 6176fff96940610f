# app/services/sessions.py
"""
Tutoring session requests and their status lifecycle.

    pending -> accepted -> completed
    pending -> rejected

Status changes are written with a conditional UPDATE on the expected
current status, so concurrent requests cannot both move the same session.
Completion moves the offered SkillCoins from student to tutor in the same
database transaction as the status change.
"""
import logging
from datetime import datetime
from typing import List

from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InsufficientBalance, InvalidTransition, NotFound, SessionMismatch
from app.db.models import transaction as ledger
from app.db.models.session_request import ACCEPTED, COMPLETED, PENDING, REJECTED, SESSION_STATUSES, SessionRequest
from app.db.models.transaction import Transaction
from app.db.models.user import User
from app.services import analytics

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    PENDING: {ACCEPTED, REJECTED},
    ACCEPTED: {COMPLETED},
    REJECTED: set(),
    COMPLETED: set(),
}


def can_transition(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, set())


class SessionWorkflow:
    def __init__(self, db: Session):
        self.db = db

    def get(self, session_id: int) -> SessionRequest:
        record = self.db.query(SessionRequest).filter(SessionRequest.id == session_id).first()
        if not record:
            raise NotFound("Session not found")
        return record

    def create(self, student_id: int, tutor_id: int, skill: str, problem: str, offered_amount: int) -> int:
        if offered_amount is None or offered_amount <= 0:
            raise ValueError("offered_amount must be greater than zero")
        if student_id == tutor_id:
            raise ValueError("You cannot request a session with yourself")

        student = self.db.query(User).filter(User.id == student_id).first()
        tutor = self.db.query(User).filter(User.id == tutor_id).first()
        if not student:
            raise NotFound("Student not found")
        if not tutor:
            raise NotFound("Tutor not found")

        record = SessionRequest(
            student_id=student.id,
            student_name=student.name,
            tutor_id=tutor.id,
            tutor_name=tutor.name,
            skill=skill,
            problem=problem,
            skill_coins_offered=offered_amount,
            status=PENDING,
        )
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Error creating session request")
            raise
        self.db.refresh(record)

        logger.info("Session %s requested by %s from tutor %s (%s coins)", record.id, student_id, tutor_id, offered_amount)
        analytics.log_tutor_request(tutor.id, skill)
        return record.id

    def _transition(self, record: SessionRequest, new_status: str, **values) -> None:
        """Conditional status write; does not commit."""
        if new_status not in SESSION_STATUSES:
            raise ValueError(f"Unknown status {new_status!r}")
        current = record.status
        if not can_transition(current, new_status):
            raise InvalidTransition(current, new_status)

        result = self.db.execute(
            update(SessionRequest)
            .where(SessionRequest.id == record.id, SessionRequest.status == current)
            .values(status=new_status, updated_at=datetime.utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            # someone else moved it first
            self.db.rollback()
            self.db.refresh(record)
            raise InvalidTransition(record.status, new_status)

    def set_status(self, session_id: int, new_status: str) -> SessionRequest:
        if new_status == COMPLETED:
            # completion always goes through complete() so coins move with it
            record = self.get(session_id)
            return self.complete(record.id, record.student_id, record.tutor_id, record.skill_coins_offered)

        record = self.get(session_id)
        try:
            self._transition(record, new_status)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Error updating session status")
            raise
        self.db.refresh(record)
        logger.info("Session %s is now %s", record.id, new_status)
        return record

    def complete(self, session_id: int, student_id: int, tutor_id: int, amount: int) -> SessionRequest:
        record = self.get(session_id)
        if (record.student_id, record.tutor_id, record.skill_coins_offered) != (student_id, tutor_id, amount):
            raise SessionMismatch("Student, tutor or amount does not match this session")

        try:
            self._transition(record, COMPLETED, completed_at=datetime.utcnow())

            debit = self.db.execute(
                update(User)
                .where(User.id == student_id, User.skill_coins >= amount)
                .values(skill_coins=User.skill_coins - amount)
                .execution_options(synchronize_session=False)
            )
            if debit.rowcount != 1:
                self.db.rollback()
                balance = self.db.query(User.skill_coins).filter(User.id == student_id).scalar() or 0
                raise InsufficientBalance(balance, amount)

            self.db.execute(
                update(User)
                .where(User.id == tutor_id)
                .values(skill_coins=User.skill_coins + amount)
                .execution_options(synchronize_session=False)
            )
            self.db.add_all([
                Transaction(
                    user_id=student_id,
                    type=ledger.SPENT,
                    amount=amount,
                    description=f"Session #{record.id}: {record.skill}",
                    session_id=record.id,
                ),
                Transaction(
                    user_id=tutor_id,
                    type=ledger.EARNED,
                    amount=amount,
                    description=f"Session #{record.id}: {record.skill}",
                    session_id=record.id,
                ),
            ])
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Error completing session %s", session_id)
            raise

        self.db.refresh(record)
        for user in self.db.query(User).filter(User.id.in_([student_id, tutor_id])).all():
            self.db.refresh(user)

        logger.info("Session %s completed: %s coins from %s to %s", record.id, amount, student_id, tutor_id)
        started = record.checked_in_at or record.created_at
        duration = (record.completed_at - started).total_seconds() if started and record.completed_at else 0
        analytics.log_session_complete(record.id, duration, amount)
        analytics.log_coin_transaction(ledger.SPENT, amount)
        analytics.log_coin_transaction(ledger.EARNED, amount)
        return record

    def check_in(self, record: SessionRequest, zone_id: str) -> SessionRequest:
        if record.status != ACCEPTED:
            raise InvalidTransition(record.status, "checked-in")
        record.safe_zone_id = zone_id
        record.checked_in_at = datetime.utcnow()
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(record)
        return record

    # queries

    def pending_for_tutor(self, tutor_id: int) -> List[SessionRequest]:
        return (
            self.db.query(SessionRequest)
            .filter(SessionRequest.tutor_id == tutor_id, SessionRequest.status == PENDING)
            .order_by(SessionRequest.created_at.desc())
            .all()
        )

    def for_student(self, student_id: int) -> List[SessionRequest]:
        return (
            self.db.query(SessionRequest)
            .filter(SessionRequest.student_id == student_id)
            .order_by(SessionRequest.created_at.desc())
            .all()
        )

    def for_tutor(self, tutor_id: int) -> List[SessionRequest]:
        return (
            self.db.query(SessionRequest)
            .filter(SessionRequest.tutor_id == tutor_id)
            .order_by(SessionRequest.created_at.desc())
            .all()
        )

    def all_for_user(self, user_id: int) -> List[SessionRequest]:
        return self.for_student(user_id) + self.for_tutor(user_id)

    def involving(self, user_id: int):
        return self.db.query(SessionRequest).filter(
            or_(SessionRequest.student_id == user_id, SessionRequest.tutor_id == user_id)
        )
