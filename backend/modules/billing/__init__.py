"""
Billing module.

Handles Stripe checkout and reconciles entitlements from checkout
redirects and webhooks.

Public API:
- IBillingService: Interface for billing operations
- IPaymentGateway: Interface over the Stripe SDK
- ProductType, EntitlementType: Purchasable products and what they grant
- Billing exceptions: WebhookVerificationError, etc.
"""

from .interfaces import IBillingService, IPaymentGateway
from .models import (
    ProductType,
    EntitlementType,
    CheckoutMode,
    StripeEventType,
    Product,
    PRODUCTS,
    CheckoutRequest,
    CheckoutResponse,
)
from .exceptions import (
    BillingError,
    BillingNotConfiguredError,
    InvalidProductError,
    PaymentFailedError,
    WebhookVerificationError,
)

__all__ = [
    # Interfaces
    "IBillingService",
    "IPaymentGateway",
    # Models
    "ProductType",
    "EntitlementType",
    "CheckoutMode",
    "StripeEventType",
    "Product",
    "PRODUCTS",
    "CheckoutRequest",
    "CheckoutResponse",
    # Exceptions
    "BillingError",
    "BillingNotConfiguredError",
    "InvalidProductError",
    "PaymentFailedError",
    "WebhookVerificationError",
]
