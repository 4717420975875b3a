"""
Billing service implementation.

Creates Stripe checkout sessions and reconciles user entitlements from
the checkout-success redirect and from Stripe webhooks. Every update is
a plain assignment, so running both paths for one purchase, or
receiving a webhook twice, leaves the same end state.
"""

import logging
from typing import Any, Optional

import stripe

from modules.auth.exceptions import UserNotFoundError
from modules.auth.interfaces import IUserRepository
from modules.auth.models import SubscriptionTier, User, UserUpdate
from shared.config import Settings, get_settings

from .exceptions import (
    BillingNotConfiguredError,
    InvalidProductError,
    PaymentFailedError,
    WebhookVerificationError,
)
from .gateway import StripeGateway
from .interfaces import IBillingService, IPaymentGateway
from .models import (
    ACCOUNT_PATH,
    ACTIVE_SUBSCRIPTION_STATUSES,
    BOOK_SUCCESS_PATH,
    HOME_PATH,
    PREMIUM_SUCCESS_PATH,
    PRODUCTS,
    CheckoutMode,
    CheckoutResponse,
    EntitlementType,
    ProductType,
    StripeEventType,
)

logger = logging.getLogger(__name__)

CHECKOUT_SUCCESS_ROUTE = "/api/stripe/checkout-success?session_id={CHECKOUT_SESSION_ID}"


def is_session_paid(session: dict[str, Any]) -> bool:
    """
    Whether a checkout session represents a completed payment.

    For first-time subscription charges payment_status can be
    'no_payment_required', so a subscription reference also counts.
    """
    if session.get("payment_status") == "paid":
        return True
    return session.get("mode") == CheckoutMode.SUBSCRIPTION.value and bool(session.get("subscription"))


def session_user_id(session: dict[str, Any]) -> Optional[int]:
    metadata = session.get("metadata") or {}
    try:
        return int(metadata.get("user_id"))
    except (TypeError, ValueError):
        return None


def entitlement_update(session: dict[str, Any]) -> UserUpdate:
    """Translate a paid checkout session into the user fields it grants."""
    metadata = session.get("metadata") or {}
    fields: dict[str, Any] = {}
    if session.get("customer"):
        fields["stripe_customer_id"] = _stripe_id(session["customer"])
    if metadata.get("type") == EntitlementType.BOOK.value:
        fields["has_book"] = True
    if metadata.get("type") == EntitlementType.PREMIUM.value:
        fields["subscription_status"] = SubscriptionTier.PREMIUM
    return UserUpdate(**fields)


def _stripe_id(value: Any) -> str:
    # Expanded objects arrive as dicts
    if isinstance(value, dict):
        return value["id"]
    return str(value)


class BillingService(IBillingService):
    """
    Stripe-backed implementation of the billing service.

    The gateway is created lazily so that routes which never talk to
    Stripe work without STRIPE_SECRET_KEY.
    """

    def __init__(
        self,
        users: IUserRepository,
        settings: Optional[Settings] = None,
        gateway: Optional[IPaymentGateway] = None,
    ):
        self._users = users
        self._settings = settings or get_settings()
        self._gateway = gateway

    def _get_gateway(self) -> IPaymentGateway:
        if self._gateway is None:
            if not self._settings.stripe_secret_key:
                raise BillingNotConfiguredError("stripe_secret_key")
            self._gateway = StripeGateway(
                self._settings.stripe_secret_key,
                self._settings.stripe_api_version,
            )
        return self._gateway

    def get_publishable_key(self) -> str:
        if not self._settings.stripe_publishable_key:
            raise BillingNotConfiguredError("stripe_publishable_key")
        return self._settings.stripe_publishable_key

    # -------------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------------

    async def create_checkout(
        self,
        user_id: int,
        product_type: str,
        embedded: bool,
        origin: str,
    ) -> CheckoutResponse:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        try:
            product = PRODUCTS[ProductType(product_type)]
        except ValueError:
            raise InvalidProductError(product_type)

        price = getattr(self._settings, product.price_setting)
        if not price:
            raise BillingNotConfiguredError(product.price_setting)

        params: dict[str, Any] = {
            "mode": product.mode.value,
            "line_items": [{"price": price, "quantity": 1}],
            "allow_promotion_codes": True,
            "metadata": {"user_id": str(user.id), "type": product.entitlement.value},
        }
        if embedded:
            params["ui_mode"] = "embedded"
            params["return_url"] = f"{origin}{CHECKOUT_SUCCESS_ROUTE}"
        else:
            params["success_url"] = f"{origin}{product.success_path}"
            params["cancel_url"] = f"{origin}{product.cancel_path}"

        # Reuse the existing Stripe customer to avoid duplicates
        if user.stripe_customer_id:
            params["customer"] = user.stripe_customer_id
        else:
            params["customer_email"] = user.email

        gateway = self._get_gateway()
        try:
            session = await gateway.create_checkout_session(params)
        except stripe.StripeError as e:
            logger.error(f"Stripe checkout error: {e}")
            raise PaymentFailedError("Failed to create checkout session", stripe_error=str(e))

        logger.info(f"Checkout created for user {user.id}: {product.type.value}")
        if embedded:
            return CheckoutResponse(client_secret=session.get("client_secret"))
        return CheckoutResponse(url=session.get("url"))

    async def complete_checkout(self, session_id: Optional[str]) -> str:
        if not session_id:
            return HOME_PATH

        try:
            session = await self._get_gateway().retrieve_checkout_session(session_id)
            await self.apply_checkout_session(session)
        except Exception as e:
            logger.error(f"checkout-success error: {e}")
            return ACCOUNT_PATH

        metadata = session.get("metadata") or {}
        if metadata.get("type") == EntitlementType.BOOK.value:
            return BOOK_SUCCESS_PATH
        return PREMIUM_SUCCESS_PATH

    async def apply_checkout_session(self, session: dict[str, Any]) -> Optional[User]:
        user_id = session_user_id(session)
        if user_id is None:
            logger.warning(f"Checkout session {session.get('id')} has no user_id in metadata")
            return None
        if not is_session_paid(session):
            logger.info(f"Checkout session {session.get('id')} not paid yet")
            return None

        changes = entitlement_update(session).changes()
        if not changes:
            return None

        user = await self._users.update_fields(user_id, changes)
        logger.info(
            f"Entitlements applied for user {user_id}: {sorted(changes)}"
        )
        return user

    # -------------------------------------------------------------------------
    # Webhooks
    # -------------------------------------------------------------------------

    async def handle_webhook(self, payload: bytes, signature: Optional[str]) -> None:
        secret = self._settings.stripe_webhook_secret
        if not secret:
            logger.error("STRIPE_WEBHOOK_SECRET not set, cannot verify webhook")
            raise BillingNotConfiguredError("stripe_webhook_secret")

        try:
            event = self._get_gateway().construct_event(payload, signature or "", secret)
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning(f"Webhook signature error: {e}")
            raise WebhookVerificationError()

        try:
            await self.apply_event(event)
        except Exception as e:
            # Acknowledge anyway so Stripe does not retry forever
            logger.error(f"Webhook handler error for {event.get('type')}: {e}")

    async def apply_event(self, event: dict[str, Any]) -> None:
        """Apply one verified webhook event. Unknown event types are ignored."""
        event_type = event.get("type")
        obj = (event.get("data") or {}).get("object") or {}

        if event_type == StripeEventType.CHECKOUT_COMPLETED.value:
            user = await self.apply_checkout_session(obj)
            metadata = obj.get("metadata") or {}
            logger.info(
                f"Stripe: checkout completed, user {user.id if user else None}, type {metadata.get('type')}"
            )

        elif event_type == StripeEventType.SUBSCRIPTION_DELETED.value:
            customer = _stripe_id(obj["customer"])
            await self._users.set_tier_by_customer(customer, SubscriptionTier.FREE)
            logger.info(f"Stripe: subscription cancelled, customer {customer}")

        elif event_type == StripeEventType.SUBSCRIPTION_UPDATED.value:
            customer = _stripe_id(obj["customer"])
            status = obj.get("status")
            tier = (
                SubscriptionTier.PREMIUM
                if status in ACTIVE_SUBSCRIPTION_STATUSES
                else SubscriptionTier.FREE
            )
            await self._users.set_tier_by_customer(customer, tier)
            logger.info(f"Stripe: subscription updated, customer {customer}, status {status}")

        elif event_type == StripeEventType.PAYMENT_FAILED.value:
            logger.warning(f"Stripe: payment failed, customer {obj.get('customer')}")

        else:
            logger.debug(f"Stripe: ignoring event {event_type}")
