# app/services/pricing.py
from app.core.config import settings
from app.schemas.pricing import PricingBreakdownResponse


def pricing_breakdown(hourly_rate: float, estimated_hours: float, platform_fee_percentage: float = None):
    """The student pays the subtotal; the platform fee comes out of the tutor's share."""
    if platform_fee_percentage is None:
        platform_fee_percentage = settings.PLATFORM_FEE_PERCENT
    subtotal = hourly_rate * estimated_hours
    platform_fee = subtotal * (platform_fee_percentage / 100)
    return PricingBreakdownResponse(
        hourly_rate=hourly_rate,
        estimated_hours=estimated_hours,
        subtotal=subtotal,
        platform_fee=platform_fee,
        platform_fee_percentage=platform_fee_percentage,
        total=subtotal,
        tutor_receives=subtotal - platform_fee,
    )
