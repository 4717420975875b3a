"""
Billing module data models.

These models define the purchasable products, checkout requests and
the entitlement changes produced by Stripe checkout sessions.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductType(str, Enum):
    """What the user is buying."""

    BOOK = "book"
    PREMIUM_MONTHLY = "premium_monthly"
    PREMIUM_LIFETIME = "premium_lifetime"


class EntitlementType(str, Enum):
    """Entitlement granted by a paid checkout (stored in session metadata)."""

    BOOK = "book"
    PREMIUM = "premium"


class CheckoutMode(str, Enum):
    PAYMENT = "payment"
    SUBSCRIPTION = "subscription"


class StripeEventType(str, Enum):
    """Webhook events the reconciler acts on."""

    CHECKOUT_COMPLETED = "checkout.session.completed"
    SUBSCRIPTION_DELETED = "customer.subscription.deleted"
    SUBSCRIPTION_UPDATED = "customer.subscription.updated"
    PAYMENT_FAILED = "invoice.payment_failed"


# Subscription statuses that keep premium access
ACTIVE_SUBSCRIPTION_STATUSES = frozenset({"active", "trialing"})


class Product(BaseModel):
    """
    A purchasable product.

    ``price_setting`` names the Settings attribute holding the Stripe price ID.
    """

    type: ProductType
    mode: CheckoutMode
    entitlement: EntitlementType
    price_setting: str
    success_path: str
    cancel_path: str


PRODUCTS: dict[ProductType, Product] = {
    ProductType.BOOK: Product(
        type=ProductType.BOOK,
        mode=CheckoutMode.PAYMENT,
        entitlement=EntitlementType.BOOK,
        price_setting="stripe_price_book",
        success_path="/book-download.html",
        cancel_path="/index.html",
    ),
    ProductType.PREMIUM_MONTHLY: Product(
        type=ProductType.PREMIUM_MONTHLY,
        mode=CheckoutMode.SUBSCRIPTION,
        entitlement=EntitlementType.PREMIUM,
        price_setting="stripe_price_premium_monthly",
        success_path="/premium-hub.html",
        cancel_path="/index.html#pricing",
    ),
    ProductType.PREMIUM_LIFETIME: Product(
        type=ProductType.PREMIUM_LIFETIME,
        mode=CheckoutMode.PAYMENT,
        entitlement=EntitlementType.PREMIUM,
        price_setting="stripe_price_premium_lifetime",
        success_path="/premium-hub.html",
        cancel_path="/index.html#pricing",
    ),
}

# Where checkout-success sends the browser
BOOK_SUCCESS_PATH = "/book-download.html"
PREMIUM_SUCCESS_PATH = "/premium-hub.html"
ACCOUNT_PATH = "/my-account.html"
HOME_PATH = "/index.html"


class CheckoutRequest(BaseModel):
    """Request to start a checkout."""

    type: str = Field(..., description="book, premium_monthly or premium_lifetime")
    embedded: bool = Field(default=False, description="Use Stripe's embedded checkout UI")


class CheckoutResponse(BaseModel):
    """Either a client secret (embedded UI) or a redirect URL."""

    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    client_secret: Optional[str] = Field(None, alias="clientSecret")


class StripeConfigResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    publishable_key: str = Field(..., alias="publishableKey")


class WebhookAck(BaseModel):
    received: bool = True
