# app/schemas/pricing.py
from pydantic import BaseModel


class PricingBreakdownResponse(BaseModel):
    hourly_rate: float
    estimated_hours: float
    subtotal: float
    platform_fee: float
    platform_fee_percentage: float
    total: float
    tutor_receives: float
