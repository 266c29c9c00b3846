from django.db import models
from django.core.exceptions import ValidationError
import logging
import zoneinfo

logger = logging.getLogger(__name__)


# === CHOICES ===

class TimezoneChoices(models.TextChoices):
    """Common timezone choices for store operations"""
    UTC = "UTC", "UTC (Coordinated Universal Time)"

    # European Timezones
    UK_LONDON = "Europe/London", "Greenwich Mean Time (UK)"
    EUROPE_AMSTERDAM = "Europe/Amsterdam", "Central European Time (Netherlands)"
    EUROPE_BERLIN = "Europe/Berlin", "Central European Time (Germany)"
    EUROPE_PARIS = "Europe/Paris", "Central European Time"
    EUROPE_HELSINKI = "Europe/Helsinki", "Eastern European Time"

    # US Timezones
    US_EASTERN = "America/New_York", "Eastern Time (US & Canada)"
    US_CENTRAL = "America/Chicago", "Central Time (US & Canada)"
    US_PACIFIC = "America/Los_Angeles", "Pacific Time (US & Canada)"

    # Other Common Timezones
    AUSTRALIA_SYDNEY = "Australia/Sydney", "Australian Eastern Time"
    ASIA_TOKYO = "Asia/Tokyo", "Japan Standard Time"


class OrderType(models.TextChoices):
    DINE_IN = "dine_in", "Dine In"
    TAKEAWAY = "takeaway", "Takeaway"
    DELIVERY = "delivery", "Delivery"


# === CORE MODELS ===


class Store(models.Model):
    """
    A single physical location of a merchant.

    The store is the unit every order, item and report is scoped to. Its timezone
    decides which calendar day an order belongs to in daily reports.
    """

    merchant = models.ForeignKey(
        'merchants.Merchant',
        on_delete=models.CASCADE,
        related_name='stores'
    )
    name = models.CharField(
        max_length=100,
        help_text="Store name (e.g., 'Downtown', 'Airport')"
    )
    slug = models.SlugField(
        max_length=100,
        help_text="URL-friendly identifier for this store"
    )
    timezone = models.CharField(
        max_length=50,
        choices=TimezoneChoices.choices,
        default=TimezoneChoices.UTC,
        help_text="This store's timezone. Used for reports and pickup days."
    )
    currency = models.CharField(
        max_length=3,
        blank=True,
        help_text="ISO 4217 currency code. Falls back to ORDERING['DEFAULT_CURRENCY'] when empty."
    )

    # === ORDERING ===
    is_active = models.BooleanField(
        default=True,
        help_text="Inactive stores do not accept new orders"
    )
    dine_in_enabled = models.BooleanField(default=True)
    takeaway_enabled = models.BooleanField(default=True)
    delivery_enabled = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                fields=['merchant', 'slug'],
                name='unique_store_slug_per_merchant'
            ),
        ]
        indexes = [
            models.Index(fields=['merchant', 'is_active'], name='store_merchant_active_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.merchant.name})"

    def clean(self):
        super().clean()
        if self.timezone:
            try:
                zoneinfo.ZoneInfo(self.timezone)
            except (zoneinfo.ZoneInfoNotFoundError, ValueError):
                raise ValidationError({'timezone': f"Unknown timezone '{self.timezone}'"})

    def save(self, *args, **kwargs):
        if not self.currency:
            from core_backend.config import ordering_settings
            self.currency = ordering_settings.default_currency
        super().save(*args, **kwargs)

    @property
    def enabled_order_types(self):
        enabled = []
        if self.dine_in_enabled:
            enabled.append(OrderType.DINE_IN)
        if self.takeaway_enabled:
            enabled.append(OrderType.TAKEAWAY)
        if self.delivery_enabled:
            enabled.append(OrderType.DELIVERY)
        return enabled

    def accepts_order_type(self, order_type):
        return order_type in self.enabled_order_types


class StoreCounter(models.Model):
    """
    Per-store sequence for customer-facing pickup numbers.

    Locked with select_for_update() while a number is handed out, so two orders
    placed at the same moment never receive the same number.
    """

    store = models.OneToOneField(
        Store,
        on_delete=models.CASCADE,
        related_name='counter'
    )
    last_pickup_number = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"Counter for {self.store.name}: {self.last_pickup_number}"
