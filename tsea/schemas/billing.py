"""
Billing schemas (checkout stub and tier webhook).
"""

from typing import Optional

from pydantic import BaseModel, EmailStr

from tsea.curriculum.models import Tier


class CheckoutResponse(BaseModel):
    plan: Tier
    coupon: Optional[str] = None
    message: str


class TierUpdate(BaseModel):
    """Webhook body assigning a tier to an account."""

    email: EmailStr
    tier: Tier


class TierUpdateResponse(BaseModel):
    email: str
    tier: Tier
