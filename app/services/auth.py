# app/services/auth.py
"""
Authentication state for one request.

``AuthContext`` is created per request by the ``get_auth_context``
dependency; there is no module-level current user. It starts in the
``unknown`` state and becomes ``authenticated`` or ``anonymous`` once a
token has been resolved or a sign-in call succeeds.
"""
import logging
from enum import Enum
from typing import Optional, Tuple

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AlreadyRegistered, FeatureUnavailable, InvalidCredentials
from app.core.security import auth_scheme, create_access_token, hash_password, user_from_token, verify_password
from app.db.base import get_db
from app.db.models import transaction as ledger
from app.db.models.transaction import Transaction
from app.db.models.user import User
from app.schemas.user import UserCreate
from app.services import analytics

logger = logging.getLogger(__name__)


class AuthState(str, Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class AuthContext:
    def __init__(self, db: Session):
        self.db = db
        self.state = AuthState.UNKNOWN
        self.current_user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.state == AuthState.AUTHENTICATED

    def _set_user(self, user: Optional[User]) -> None:
        self.current_user = user
        self.state = AuthState.AUTHENTICATED if user else AuthState.ANONYMOUS

    def resolve(self, token: Optional[str]) -> "AuthContext":
        self._set_user(user_from_token(self.db, token))
        return self

    def _provision(self, **fields) -> User:
        """New profile with the welcome bonus and an empty skill list."""
        user = User(skill_coins=settings.WELCOME_BONUS, is_verified=False, **fields)
        self.db.add(user)
        self.db.flush()
        self.db.add(Transaction(
            user_id=user.id,
            type=ledger.BONUS,
            amount=settings.WELCOME_BONUS,
            description="Welcome bonus",
        ))
        return user

    def register(self, data: UserCreate) -> Tuple[User, str]:
        if self.db.query(User).filter(User.student_id == data.student_id).first():
            raise AlreadyRegistered()

        user = self._provision(
            student_id=data.student_id,
            name=data.name,
            university=data.university,
            password_hash=hash_password(data.password),
            skills=[],
        )
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise AlreadyRegistered()
        self.db.refresh(user)

        self._set_user(user)
        logger.info("Registered student %s (user %s)", user.student_id, user.id)
        analytics.log_signup("email")
        analytics.log_coin_transaction(ledger.BONUS, settings.WELCOME_BONUS)
        return user, create_access_token(user)

    def sign_in_with_credentials(self, student_id: str, password: str) -> Tuple[User, str]:
        user = self.db.query(User).filter(User.student_id == student_id).first()
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed sign-in for student id %s", student_id)
            raise InvalidCredentials()

        self._set_user(user)
        analytics.log_login("student_id")
        return user, create_access_token(user)

    def sign_in_with_provider(self, id_token: str) -> Tuple[User, str, bool]:
        """
        Signs in with a token issued by the upstream identity provider.
        The first sign-in for a subject provisions a profile.
        """
        if not settings.identity_provider_enabled:
            raise FeatureUnavailable("Provider sign-in is not configured. Set IDENTITY_PROVIDER_SECRET to enable it.")
        try:
            claims = jwt.decode(id_token, settings.IDENTITY_PROVIDER_SECRET, algorithms=["HS256"])
        except JWTError:
            raise InvalidCredentials("Failed to sign in with Google")

        subject = claims.get("sub")
        if not subject:
            raise InvalidCredentials("Failed to sign in with Google")

        user = self.db.query(User).filter(User.provider_uid == str(subject)).first()
        is_new = user is None
        if is_new:
            user = self._provision(
                auth_provider="google",
                provider_uid=str(subject),
                email=claims.get("email"),
                name=claims.get("name") or "",
                university="",
                photo_url=claims.get("picture"),
                skills=[],
            )
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise AlreadyRegistered("An account with this email already exists")
            self.db.refresh(user)
            analytics.log_signup("google")
            analytics.log_coin_transaction(ledger.BONUS, settings.WELCOME_BONUS)
        else:
            analytics.log_login("google")

        self._set_user(user)
        return user, create_access_token(user), is_new

    def sign_out(self) -> None:
        if self.current_user is not None:
            self.current_user.token_version = (self.current_user.token_version or 0) + 1
            self.db.commit()
            logger.info("User %s signed out", self.current_user.id)
        self._set_user(None)

    def refresh(self) -> Optional[User]:
        if self.current_user is not None:
            self.db.refresh(self.current_user)
        return self.current_user


def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(auth_scheme),
    db: Session = Depends(get_db),
) -> AuthContext:
    ctx = AuthContext(db)
    return ctx.resolve(credentials.credentials if credentials else None)
