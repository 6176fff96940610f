import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.exceptions import SkillSwitchError, skillswitch_error_handler
from app.core.logging import setup_logging
from app.db.base import Base, engine
from app.db.models import analytics_event, resource, review, session_request, transaction, user  # noqa: F401
from app.api.routes import auth
from app.api.routes import admin as admin_router
from app.api.routes import profile as profile_router
from app.api.routes import tutors as tutors_router
from app.api.routes import sessions as sessions_router
from app.api.routes import review as review_router
from app.api.routes import safe_zones as safe_zones_router
from app.api.routes import marketplace as marketplace_router
from app.api.routes import tools as tools_router
from app.api.routes import chat as chat_router
from app.api.routes import pricing as pricing_router
from app.api.routes import dashboard as dashboard_router
from app.api.routes import events as events_router

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(SkillSwitchError, skillswitch_error_handler)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Something went wrong. Please try again."})


@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)
    logger.info(
        "SkillSwitch API started (AI matching %s, maps %s, provider sign-in %s)",
        "on" if settings.genai_enabled else "off",
        "on" if settings.maps_enabled else "off",
        "on" if settings.identity_provider_enabled else "off",
    )


@app.get("/")
def root():
    return {"message": "SkillSwitch API running"}


app.include_router(auth.router, prefix="/api")
app.include_router(profile_router.router, prefix="/api")
app.include_router(admin_router.router, prefix="/api")
app.include_router(tutors_router.router, prefix="/api")
app.include_router(sessions_router.router, prefix="/api")
app.include_router(review_router.router, prefix="/api")
app.include_router(safe_zones_router.router, prefix="/api")
app.include_router(marketplace_router.router, prefix="/api")
app.include_router(tools_router.router, prefix="/api")
app.include_router(chat_router.router, prefix="/api")
app.include_router(pricing_router.router, prefix="/api")
app.include_router(dashboard_router.router, prefix="/api")
app.include_router(events_router.router, prefix="/api")
