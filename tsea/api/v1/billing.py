"""
Billing endpoints.

Checkout is a stub that echoes the selected plan; the webhook is the only
path that changes a user's tier.
"""

import hmac
from typing import Annotated, Optional

from fastapi import APIRouter, Header, HTTPException, Query, status

from tsea.api.deps import DbSession
from tsea.config import get_settings
from tsea.curriculum.models import Tier
from tsea.kernel.identity.identity_service import IdentityService
from tsea.logging_config import get_logger
from tsea.schemas.billing import CheckoutResponse, TierUpdate, TierUpdateResponse

logger = get_logger(__name__)
router = APIRouter()

WEBHOOK_SECRET_HEADER = "X-Billing-Secret"


@router.get("/checkout", response_model=CheckoutResponse)
async def checkout(
    plan: Tier = Query(Tier.PRO),
    coupon: str = Query("", max_length=64),
):
    """Accepts ?plan=pro|elite and an optional coupon."""
    if plan is Tier.BASIC:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The basic plan does not require checkout",
        )
    return CheckoutResponse(
        plan=plan,
        coupon=coupon.strip() or None,
        message="Checkout is not connected to a payment provider yet.",
    )


@router.post("/webhook", response_model=TierUpdateResponse)
async def tier_webhook(
    data: TierUpdate,
    db: DbSession,
    x_billing_secret: Annotated[Optional[str], Header(alias=WEBHOOK_SECRET_HEADER)] = None,
):
    """Assign a subscription tier to an account."""
    secret = get_settings().billing_webhook_secret
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Billing webhook is not configured",
        )
    if not x_billing_secret or not hmac.compare_digest(x_billing_secret, secret):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid webhook secret",
        )

    user = await IdentityService(db).set_tier(data.email, data.tier)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return TierUpdateResponse(email=user.email, tier=Tier(user.tier_value))
