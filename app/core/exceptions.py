# app/core/exceptions.py
from fastapi import Request
from fastapi.responses import JSONResponse


class SkillSwitchError(Exception):
    """Base class for domain errors raised by the service layer."""

    status_code = 400

    def __init__(self, detail: str = None):
        self.detail = detail or self.__class__.__doc__ or self.__class__.__name__
        super().__init__(self.detail)


class InvalidTransition(SkillSwitchError):
    """Session status change not allowed from the current status."""

    status_code = 409

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move session from '{current}' to '{requested}'")


class InsufficientBalance(SkillSwitchError):
    """Not enough SkillCoins to complete this session."""

    status_code = 402

    def __init__(self, balance: int, required: int):
        self.balance = balance
        self.required = required
        super().__init__(f"Insufficient SkillCoins: balance {balance}, required {required}")


class SessionMismatch(SkillSwitchError):
    """Completion details do not match the session record."""

    status_code = 400


class InvalidCredentials(SkillSwitchError):
    """Invalid student ID or password"""

    status_code = 401


class AlreadyRegistered(SkillSwitchError):
    """This student ID is already registered"""

    status_code = 409


class FeatureUnavailable(SkillSwitchError):
    """Feature is not configured on this server."""

    status_code = 503


class NotFound(SkillSwitchError):
    """Not found"""

    status_code = 404


async def skillswitch_error_handler(request: Request, exc: SkillSwitchError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
