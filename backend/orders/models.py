import uuid
from django.db import models
from django.utils.translation import gettext_lazy as _

from stores.models import OrderType
from payments.money import from_minor


class Order(models.Model):
    # --- Status Fields ---
    class OrderStatus(models.TextChoices):
        CREATED = "CREATED", _("Created")  # Placed by the customer
        CONFIRMED = "CONFIRMED", _("Confirmed")  # Accepted and paid
        PREPARING = "PREPARING", _("Preparing")  # In the kitchen
        READY = "READY", _("Ready")  # Waiting for pickup / delivery
        COMPLETED = "COMPLETED", _("Completed")  # Handed over
        CANCELLED = "CANCELLED", _("Cancelled")

    class PaymentStatus(models.TextChoices):
        PENDING = "PENDING", _("Pending")
        PAID = "PAID", _("Paid")
        REFUNDED = "REFUNDED", _("Refunded")

    TERMINAL_STATUSES = (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(
        'stores.Store',
        on_delete=models.PROTECT,
        related_name='orders',
        help_text='Store where this order was placed'
    )
    merchant = models.ForeignKey(
        'merchants.Merchant',
        on_delete=models.PROTECT,
        related_name='orders',
        help_text='Owner of the store at the time the order was placed'
    )
    status = models.CharField(
        max_length=10, choices=OrderStatus.choices, default=OrderStatus.CREATED
    )
    payment_status = models.CharField(
        max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.PENDING
    )
    order_type = models.CharField(
        max_length=10, choices=OrderType.choices, default=OrderType.TAKEAWAY
    )

    # Human-readable number called out at the counter; cycles per store.
    pickup_number = models.PositiveIntegerField()

    # Optimistic lock for status transitions.
    version = models.PositiveIntegerField(default=1)

    idempotency_key = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        help_text=_("Client-supplied key; resubmitting the same key returns the original order."),
    )

    # --- Customer Fields ---
    customer_name = models.CharField(max_length=150, blank=True)
    customer_email = models.EmailField(blank=True)
    customer_phone = models.CharField(max_length=20, blank=True)
    customer_notes = models.TextField(blank=True)

    # --- Financial Fields (minor units) ---
    currency = models.CharField(max_length=3)
    subtotal_cents = models.IntegerField(default=0)
    vat_cents = models.IntegerField(default=0)
    total_cents = models.IntegerField(default=0)

    payment_reference = models.CharField(max_length=100, blank=True)
    refund_reference = models.CharField(max_length=100, blank=True)

    cancel_reason = models.TextField(blank=True)

    # --- Timestamps ---
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    preparing_at = models.DateTimeField(null=True, blank=True)
    ready_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['store', 'idempotency_key'],
                name='unique_order_idempotency_key_per_store'
            ),
        ]
        indexes = [
            models.Index(fields=['store', 'status'], name='order_store_status_idx'),
            models.Index(fields=['store', 'created_at'], name='order_store_created_idx'),
            models.Index(fields=['merchant', 'created_at'], name='order_merchant_created_idx'),
        ]

    def __str__(self):
        return f"Order #{self.pickup_number:03d} ({self.get_status_display()})"

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    @property
    def is_kitchen_visible(self):
        """
        Paid orders show up in the kitchen right away; unpaid ones once a person has
        moved them past CREATED. Terminal orders leave the queue.
        """
        if self.is_terminal:
            return False
        return (
            self.payment_status == self.PaymentStatus.PAID
            or self.status != self.OrderStatus.CREATED
        )

    @property
    def total(self):
        return from_minor(self.currency, self.total_cents)


class OrderItem(models.Model):
    """
    A priced line of an order.

    Every price field is a snapshot taken when the order was created; the menu
    item may change or disappear later without affecting this row.
    """
    order = models.ForeignKey(Order, related_name="items", on_delete=models.CASCADE)
    item = models.ForeignKey(
        'menu.Item',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items'
    )
    item_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField()
    unit_price_cents = models.IntegerField()
    options_price_cents = models.IntegerField(default=0)
    line_total_cents = models.IntegerField()
    vat_rate_basis_points = models.PositiveIntegerField()
    vat_cents = models.IntegerField()
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.quantity} x {self.item_name}"


class OrderItemOption(models.Model):
    order_item = models.ForeignKey(OrderItem, related_name="options", on_delete=models.CASCADE)
    choice = models.ForeignKey(
        'menu.OptionChoice',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    option_group_id = models.PositiveIntegerField()
    option_group_name = models.CharField(max_length=100)
    choice_name = models.CharField(max_length=100)
    price_delta_cents = models.IntegerField(default=0)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.option_group_name}: {self.choice_name}"
