"""
Stripe API endpoints.

The webhook reads the raw request body itself; no body model is declared
for it so the bytes reach signature verification untouched.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from api.dependencies import get_billing_service
from api.middleware.auth import get_current_session
from shared.models import SessionClaims

from .interfaces import IBillingService
from .models import CheckoutRequest, CheckoutResponse, StripeConfigResponse, WebhookAck

router = APIRouter()


@router.get("/config", response_model=StripeConfigResponse, response_model_by_alias=True)
async def get_stripe_config(
    service: IBillingService = Depends(get_billing_service),
) -> StripeConfigResponse:
    """Return the publishable key for Stripe.js (safe to expose)."""
    return StripeConfigResponse(publishable_key=service.get_publishable_key())


@router.get("/checkout-success")
async def checkout_success(
    session_id: Optional[str] = Query(default=None),
    service: IBillingService = Depends(get_billing_service),
) -> RedirectResponse:
    """
    Landing URL after embedded checkout completes.

    Reconciles the session with Stripe directly instead of waiting for
    the webhook, then redirects to the matching success page.
    """
    path = await service.complete_checkout(session_id)
    return RedirectResponse(url=path, status_code=302)


@router.post(
    "/create-checkout",
    response_model=CheckoutResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def create_checkout(
    body: CheckoutRequest,
    request: Request,
    claims: SessionClaims = Depends(get_current_session),
    service: IBillingService = Depends(get_billing_service),
) -> CheckoutResponse:
    """
    Start a checkout for the signed-in user.

    Returns ``clientSecret`` for embedded checkout, ``url`` otherwise.
    """
    origin = str(request.base_url).rstrip("/")
    return await service.create_checkout(claims.user_id, body.type, body.embedded, origin)


@router.post("/webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    service: IBillingService = Depends(get_billing_service),
) -> WebhookAck:
    """
    Stripe webhook receiver.

    Unverifiable events get a 400. Verified events are always acknowledged,
    even when applying them fails.
    """
    payload = await request.body()
    await service.handle_webhook(payload, request.headers.get("stripe-signature"))
    return WebhookAck()
