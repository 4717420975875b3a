"""
Billing module exceptions.

These exceptions are raised by the billing module and rendered by the
API error handler with the status code of their base class.
"""

from typing import Optional

from shared.exceptions import (
    ExternalServiceError,
    FundsEdgeError,
    ServiceUnavailableError,
    ValidationError,
)


class BillingError(FundsEdgeError):
    """Base exception for billing-related errors."""

    pass


class BillingNotConfiguredError(ServiceUnavailableError):
    """Raised when a Stripe key or price ID is missing from the environment."""

    def __init__(self, setting: str):
        super().__init__(
            f"Billing not configured ({setting.upper()} missing)",
            code="BILLING_NOT_CONFIGURED",
            details={"setting": setting.upper()},
        )


class InvalidProductError(ValidationError):
    """Raised when a checkout asks for an unknown product type."""

    def __init__(self, product_type: str):
        super().__init__(
            "Invalid type. Use: book, premium_monthly, or premium_lifetime",
            code="INVALID_PRODUCT",
            details={"type": product_type},
        )


class PaymentFailedError(ExternalServiceError):
    """Raised when Stripe rejects a checkout request."""

    def __init__(self, message: str, stripe_error: Optional[str] = None):
        super().__init__(
            message,
            service="stripe",
            code="PAYMENT_FAILED",
            details={"stripe_error": stripe_error} if stripe_error else {},
        )


class WebhookVerificationError(BillingError):
    """Raised when Stripe webhook signature verification fails."""

    status_code = 400

    def __init__(self):
        super().__init__(
            "Webhook signature verification failed",
            code="WEBHOOK_VERIFICATION_FAILED",
        )
