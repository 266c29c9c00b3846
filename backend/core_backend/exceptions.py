"""
Error taxonomy for the ordering engine.

Services raise these synchronously from the operation that detects the problem.
They are never retried internally. The HTTP layer translates them through
``ordering_exception_handler`` (installed as DRF's EXCEPTION_HANDLER).
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class OrderingError(Exception):
    """Base exception for ordering-related errors."""

    code = "ordering_error"

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(OrderingError):
    """Malformed or out-of-policy input (bad quantity, bad option selection, illegal transition)."""

    code = "validation_error"


class NotFoundError(OrderingError):
    """Unknown order, item, VAT group, option choice or store."""

    code = "not_found"


class ForbiddenError(OrderingError):
    """The calling merchant does not own the resource."""

    code = "forbidden"


class ConflictError(OrderingError):
    """Concurrent transition race, or a transition attempted on a terminal order."""

    code = "conflict"


class PaymentProviderError(OrderingError):
    """The payment provider failed while applying a side-effecting transition."""

    code = "payment_provider_error"


STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    PaymentProviderError: status.HTTP_502_BAD_GATEWAY,
}


def ordering_exception_handler(exc, context):
    """
    Map ordering errors to HTTP responses, defer everything else to DRF.
    """
    if isinstance(exc, OrderingError):
        status_code = status.HTTP_400_BAD_REQUEST
        for exc_class, code in STATUS_CODES.items():
            if isinstance(exc, exc_class):
                status_code = code
                break

        view = context.get("view")
        logger.info(
            f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: {exc.message}"
        )
        return Response(
            {"error": exc.code, "detail": exc.message, **exc.details},
            status=status_code,
        )

    return exception_handler(exc, context)
