"""
Billing module interfaces.

Routes depend on IBillingService; the service depends on IPaymentGateway
so Stripe can be replaced by a fake in tests.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from modules.auth.models import User

from .models import CheckoutResponse


@runtime_checkable
class IPaymentGateway(Protocol):
    """Payment provider operations used by the reconciler."""

    async def create_checkout_session(self, params: dict[str, Any]) -> dict[str, Any]:
        """Create a checkout session and return it as a dict."""
        ...

    async def retrieve_checkout_session(self, session_id: str) -> dict[str, Any]:
        """Fetch the authoritative checkout session record."""
        ...

    def construct_event(self, payload: bytes, signature: str, secret: str) -> dict[str, Any]:
        """Verify a webhook signature and return the parsed event."""
        ...


@runtime_checkable
class IBillingService(Protocol):
    """
    Interface for checkout and entitlement reconciliation.

    Both the checkout-success redirect and the webhook converge on the
    same idempotent entitlement update.
    """

    def get_publishable_key(self) -> str:
        """
        Get the Stripe publishable key for Stripe.js.

        Raises:
            BillingNotConfiguredError: If the key is not set
        """
        ...

    async def create_checkout(
        self,
        user_id: int,
        product_type: str,
        embedded: bool,
        origin: str,
    ) -> CheckoutResponse:
        """
        Start a Stripe checkout for a signed-in user.

        Raises:
            UserNotFoundError: If the user doesn't exist
            InvalidProductError: If the product type is unknown
            BillingNotConfiguredError: If Stripe or the price is not configured
            PaymentFailedError: If Stripe rejects the request
        """
        ...

    async def complete_checkout(self, session_id: Optional[str]) -> str:
        """
        Reconcile a finished checkout from the browser redirect.

        Never raises; returns the path to redirect the browser to.
        """
        ...

    async def handle_webhook(self, payload: bytes, signature: Optional[str]) -> None:
        """
        Verify and apply a Stripe webhook event.

        Raises:
            BillingNotConfiguredError: If the webhook secret is not set
            WebhookVerificationError: If the signature is invalid
        """
        ...

    async def apply_checkout_session(self, session: dict[str, Any]) -> Optional[User]:
        """
        Apply the entitlement granted by a paid checkout session.

        Returns:
            The updated user, or None if the session was unpaid or had no user
        """
        ...
