# app/services/analytics.py
"""
Fire-and-forget product analytics.

Events are logged and stored in ``analytics_events``. Recording never
raises: a failing sink is logged and ignored so that the calling request
is unaffected.
"""
import logging
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.db import base as db_base
from app.db.models.analytics_event import AnalyticsEvent

logger = logging.getLogger("app.analytics")


def track(event_name: str, **params: Any) -> None:
    logger.info("[Analytics] %s %s", event_name, params)
    if not settings.ANALYTICS_ENABLED:
        return

    db = db_base.SessionLocal()
    try:
        db.add(AnalyticsEvent(name=event_name, params=_flatten(params)))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Dropping analytics event %s: %s", event_name, e)
    finally:
        db.close()


def _flatten(params: Dict[str, Any]) -> Dict[str, Any]:
    # payloads are flat key/value pairs; anything else is stringified
    flat = {}
    for key, value in params.items():
        if value is None or isinstance(value, (str, int, float, bool)):
            flat[key] = value
        else:
            flat[key] = str(value)
    return flat


def log_page_view(page_name: str, page_path: str):
    track("page_view", page_path=page_path, page_title=page_name)


def log_tutor_search(search_query: str, results_count: int):
    track("search", search_term=search_query, results_count=results_count)


def log_session_start(session_id: int, location: str):
    track("session_start", session_id=session_id, location=location)


def log_session_complete(session_id: int, duration_seconds: float, skill_coins_paid: int):
    track(
        "session_complete",
        session_id=session_id,
        duration_minutes=round(duration_seconds / 60),
        coins_paid=skill_coins_paid,
    )


def log_verification_attempt(success: bool):
    track("verification_attempt", success=success)


def log_coin_transaction(transaction_type: str, amount: int):
    track("coin_transaction", transaction_type=transaction_type, amount=amount)


def log_login(method: str):
    track("login", method=method)


def log_signup(method: str):
    track("sign_up", method=method)


def log_tutor_request(tutor_id: int, subject: str):
    track("tutor_request", tutor_id=tutor_id, subject=subject)


def log_affiliate_click(tool_id: str, tool_name: str):
    track("affiliate_click", tool_id=tool_id, tool_name=tool_name)
