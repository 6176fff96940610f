# app/api/routes/tools.py
from fastapi import APIRouter, HTTPException, Query
from typing import Optional, List

from app.reference.tools import AFFILIATE_TOOLS, TOOL_CATEGORIES, get_tool
from app.schemas.marketplace import AffiliateToolResponse
from app.services import analytics

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("", response_model=List[AffiliateToolResponse])
def list_tools(category: Optional[str] = Query(None, description="design | writing | coding | productivity | all")):
    if not category or category == "all":
        return AFFILIATE_TOOLS
    if category not in TOOL_CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Unknown category '{category}'")
    return [t for t in AFFILIATE_TOOLS if t.category == category]


# Records the click; the front end opens affiliate_link in a new tab
@router.post("/{tool_id}/click", response_model=AffiliateToolResponse)
def click_tool(tool_id: str):
    tool = get_tool(tool_id)
    if not tool:
        raise HTTPException(status_code=404, detail="Tool not found")
    analytics.log_affiliate_click(tool.id, tool.name)
    return tool
