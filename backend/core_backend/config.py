"""
Centralized access to the ordering engine's configuration.

Values come from ``settings.ORDERING`` merged over built-in defaults. The singleton is
lazy so importing it never touches Django settings before they are configured.
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


DEFAULTS: Dict[str, Any] = {
    "PAYMENT_GATEWAY": "payments.gateways.ManualPaymentGateway",
    "PICKUP_NUMBER_MODULO": 1000,
    "DEFAULT_TIMEZONE": "UTC",
    "DEFAULT_CURRENCY": "EUR",
    "EXPORT_MAX_DAYS": 366,
}


class OrderingSettings:
    """
    A lazy singleton over ``settings.ORDERING``.

    Attribute names are the lower-cased keys, e.g. ``ordering_settings.pickup_number_modulo``.
    """

    _instance: Optional["OrderingSettings"] = None

    def __new__(cls) -> "OrderingSettings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._values = None
        return cls._instance

    def _setup(self) -> None:
        configured = getattr(settings, "ORDERING", {}) or {}
        unknown = set(configured) - set(DEFAULTS)
        if unknown:
            logger.warning(f"Ignoring unknown ORDERING settings: {sorted(unknown)}")

        values = {**DEFAULTS, **{k: v for k, v in configured.items() if k in DEFAULTS}}
        if int(values["PICKUP_NUMBER_MODULO"]) < 2:
            raise ImproperlyConfigured("ORDERING['PICKUP_NUMBER_MODULO'] must be at least 2")
        if int(values["EXPORT_MAX_DAYS"]) < 1:
            raise ImproperlyConfigured("ORDERING['EXPORT_MAX_DAYS'] must be positive")

        self._values = values

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if self._values is None:
            self._setup()
        try:
            return self._values[name.upper()]
        except KeyError:
            raise AttributeError(f"'OrderingSettings' object has no attribute '{name}'")

    def reload(self) -> None:
        """Drop cached values; the next access re-reads settings (used by tests)."""
        self._values = None

    def get_payment_gateway(self):
        """Instantiate the configured payment gateway class."""
        gateway_class = import_string(self.payment_gateway)
        return gateway_class()


ordering_settings = OrderingSettings()

