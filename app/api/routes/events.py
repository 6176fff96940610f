# app/api/routes/events.py
from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.services import analytics

router = APIRouter(prefix="/events", tags=["events"])


class PageView(BaseModel):
    page_name: str = Field(..., min_length=1)
    page_path: str = Field(..., min_length=1)


# Front end reports page views here; recording failures are never surfaced
@router.post("/page-view", status_code=202)
def page_view(payload: PageView):
    analytics.log_page_view(payload.page_name, payload.page_path)
    return {"status": "accepted"}
