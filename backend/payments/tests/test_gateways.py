"""
Tests for the payment gateway adapters.
"""

import pytest
from types import SimpleNamespace

from payments.gateways import ManualPaymentGateway, PaymentGateway


class TestManualPaymentGateway:
    """The manual gateway only records captures and refunds."""

    def setup_method(self):
        self.gateway = ManualPaymentGateway()
        self.order = SimpleNamespace(pk="order-1", currency="EUR", total_cents=1428)

    def test_is_a_payment_gateway(self):
        assert isinstance(self.gateway, PaymentGateway)

    def test_capture_returns_manual_reference(self):
        reference = self.gateway.capture(self.order)
        assert reference.startswith("manual-")

    def test_capture_references_are_unique(self):
        assert self.gateway.capture(self.order) != self.gateway.capture(self.order)

    def test_refund_returns_refund_reference(self):
        reference = self.gateway.refund(self.order, 1428, reason="Customer left")
        assert reference.startswith("manual-refund-")

    def test_abstract_gateway_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            PaymentGateway()
