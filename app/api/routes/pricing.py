# app/api/routes/pricing.py
from fastapi import APIRouter, Query
from typing import Optional

from app.schemas.pricing import PricingBreakdownResponse
from app.services.pricing import pricing_breakdown

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.get("/breakdown", response_model=PricingBreakdownResponse)
def get_pricing_breakdown(
    hourly_rate: float = Query(..., ge=0),
    estimated_hours: float = Query(1.0, gt=0),
    platform_fee_percentage: Optional[float] = Query(None, ge=0, le=100),
):
    return pricing_breakdown(hourly_rate, estimated_hours, platform_fee_percentage)
