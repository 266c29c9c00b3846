from abc import ABC, abstractmethod
import uuid
import logging

from .money import format_money

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Raised by a gateway when the provider rejects or fails a call."""


class PaymentGateway(ABC):
    """
    The Abstract Base Class for a payment provider adapter.

    The order state machine calls the gateway inside the transaction that writes the
    new status, so a raised GatewayError leaves the order untouched.
    """

    @abstractmethod
    def capture(self, order) -> str:
        """
        Capture the order's total. Returns the provider's reference for the payment.
        """
        pass

    @abstractmethod
    def refund(self, order, amount_cents: int, reason: str = None) -> str:
        """
        Refund a previously captured payment. Returns the provider's refund reference.
        """
        pass


class ManualPaymentGateway(PaymentGateway):
    """
    Payments settled outside the system (cash at the counter, card terminal
    not integrated). Captures and refunds always succeed and are only recorded.
    """

    def capture(self, order) -> str:
        reference = f"manual-{uuid.uuid4().hex[:12]}"
        logger.info(
            f"Recorded manual payment {reference} of "
            f"{format_money(order.currency, order.total_cents)} for order {order.pk}"
        )
        return reference

    def refund(self, order, amount_cents: int, reason: str = None) -> str:
        reference = f"manual-refund-{uuid.uuid4().hex[:12]}"
        logger.info(
            f"Recorded manual refund {reference} of "
            f"{format_money(order.currency, amount_cents)} for order {order.pk}"
            f"{f' ({reason})' if reason else ''}"
        )
        return reference
