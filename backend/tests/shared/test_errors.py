"""Tests for shared/exceptions.py."""

from modules.auth.exceptions import EmailAlreadyRegisteredError, WeakPasswordError
from modules.billing.exceptions import PaymentFailedError
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseUnavailableError,
    ExternalServiceError,
    FundsEdgeError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)


class TestExceptionHierarchy:

    def test_status_codes(self):
        assert ValidationError("x").status_code == 400
        assert AuthenticationError("x").status_code == 401
        assert AuthorizationError("x").status_code == 403
        assert NotFoundError("x").status_code == 404
        assert ConflictError("x").status_code == 409
        assert ServiceUnavailableError("x").status_code == 500
        assert ExternalServiceError("x", service="stripe").status_code == 500

    def test_to_dict(self):
        error = FundsEdgeError("Boom", code="BOOM", details={"a": 1})
        assert error.to_dict() == {"error": "BOOM", "message": "Boom", "details": {"a": 1}}

    def test_code_defaults_to_class_name(self):
        assert NotFoundError("missing").code == "NotFoundError"

    def test_database_unavailable(self):
        error = DatabaseUnavailableError()
        assert isinstance(error, ServiceUnavailableError)
        assert error.code == "DATABASE_UNAVAILABLE"

    def test_module_errors_inherit_status(self):
        assert EmailAlreadyRegisteredError().status_code == 409
        assert WeakPasswordError(8).status_code == 400
        assert isinstance(PaymentFailedError("declined"), ExternalServiceError)
