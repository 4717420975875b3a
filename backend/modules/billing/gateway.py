"""
Thin async wrapper around the Stripe SDK.

Returns plain dicts so the reconciler never depends on StripeObject
behaviour, and runs each blocking SDK call in a worker thread.
"""

import asyncio
from typing import Any

import stripe

from .interfaces import IPaymentGateway


class StripeGateway(IPaymentGateway):
    """Stripe implementation of the payment gateway."""

    def __init__(self, api_key: str, api_version: str):
        self._api_key = api_key
        self._api_version = api_version

    async def create_checkout_session(self, params: dict[str, Any]) -> dict[str, Any]:
        session = await asyncio.to_thread(
            stripe.checkout.Session.create,
            api_key=self._api_key,
            stripe_version=self._api_version,
            **params,
        )
        return session.to_dict()

    async def retrieve_checkout_session(self, session_id: str) -> dict[str, Any]:
        session = await asyncio.to_thread(
            stripe.checkout.Session.retrieve,
            session_id,
            api_key=self._api_key,
            stripe_version=self._api_version,
        )
        return session.to_dict()

    def construct_event(self, payload: bytes, signature: str, secret: str) -> dict[str, Any]:
        """
        Verify a webhook payload and return the event.

        Raises:
            ValueError: If the payload is not valid JSON
            stripe.SignatureVerificationError: If the signature does not match
        """
        event = stripe.Webhook.construct_event(payload, signature, secret)
        return event.to_dict()
