"""
Tests for the mapping of ordering errors to HTTP responses.
"""
import pytest
from rest_framework import exceptions as drf_exceptions

from core_backend.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    OrderingError,
    PaymentProviderError,
    ValidationError,
    ordering_exception_handler,
)


class TestOrderingExceptionHandler:

    @pytest.mark.parametrize("exc,status_code,code", [
        (ValidationError("bad"), 400, "validation_error"),
        (ForbiddenError("no"), 403, "forbidden"),
        (NotFoundError("gone"), 404, "not_found"),
        (ConflictError("late"), 409, "conflict"),
        (PaymentProviderError("down"), 502, "payment_provider_error"),
        (OrderingError("other"), 400, "ordering_error"),
    ])
    def test_status_codes(self, exc, status_code, code):
        response = ordering_exception_handler(exc, {})

        assert response.status_code == status_code
        assert response.data["error"] == code
        assert response.data["detail"] == exc.message

    def test_details_are_merged_into_the_body(self):
        exc = ConflictError("Order was changed by another request", {"current_status": "READY"})

        response = ordering_exception_handler(exc, {})

        assert response.data == {
            "error": "conflict",
            "detail": "Order was changed by another request",
            "current_status": "READY",
        }

    def test_drf_errors_use_the_default_handler(self):
        response = ordering_exception_handler(drf_exceptions.NotFound(), {})

        assert response.status_code == 404
        assert "error" not in response.data

    def test_other_exceptions_are_not_handled(self):
        assert ordering_exception_handler(RuntimeError("boom"), {}) is None

    def test_errors_are_exceptions_with_messages(self):
        exc = ValidationError("Quantity must be a positive integer", {"quantity": 0})

        assert str(exc) == "Quantity must be a positive integer"
        assert exc.details == {"quantity": 0}
        assert NotFoundError("x").details == {}
