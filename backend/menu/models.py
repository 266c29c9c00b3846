from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class VatGroup(models.Model):
    """
    A VAT rate a merchant applies to its items.

    Rates are stored in basis points (700 = 7%). Orders copy the rate onto each
    line when they are created, so editing a group never changes historical orders.
    """
    merchant = models.ForeignKey(
        'merchants.Merchant',
        on_delete=models.CASCADE,
        related_name='vat_groups'
    )
    code = models.CharField(
        max_length=20,
        help_text=_("Short code printed on receipts (e.g., 'A', 'LOW').")
    )
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    rate_basis_points = models.PositiveIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(10000)],
        help_text=_("VAT rate in basis points (1900 = 19%).")
    )
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['display_order', 'name']
        constraints = [
            models.UniqueConstraint(
                fields=['merchant', 'code'],
                name='unique_vat_group_code_per_merchant'
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.rate_basis_points / 100:g}%)"


class Category(models.Model):
    store = models.ForeignKey(
        'stores.Store',
        on_delete=models.CASCADE,
        related_name='categories'
    )
    name = models.CharField(max_length=100)
    display_order = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(
        default=True,
        help_text=_("Items in an inactive category are not publishable.")
    )

    class Meta:
        verbose_name_plural = "categories"
        ordering = ['display_order', 'name']

    def __str__(self):
        return self.name


class Item(models.Model):
    """
    A menu item of a store.

    Items referenced by historical orders are never deleted; they are deactivated
    instead (see ItemService.set_active).
    """
    store = models.ForeignKey(
        'stores.Store',
        on_delete=models.CASCADE,
        related_name='items'
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='items'
    )
    vat_group = models.ForeignKey(
        VatGroup,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='items'
    )
    name = models.CharField(max_length=200, blank=True, help_text=_("Name of the item."))
    description = models.TextField(blank=True)
    price_cents = models.IntegerField(
        default=0,
        help_text=_("Price in minor currency units, excluding options.")
    )
    image_key = models.CharField(
        max_length=255,
        blank=True,
        help_text=_("Reference to the stored image. Empty when the item has no image.")
    )
    option_groups = models.ManyToManyField(
        'OptionGroup',
        blank=True,
        related_name='items'
    )
    is_active = models.BooleanField(
        default=False,
        help_text=_("Active items are shown to customers and can be ordered.")
    )
    display_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['display_order', 'name']
        indexes = [
            models.Index(fields=['store', 'is_active'], name='item_store_active_idx'),
        ]

    def __str__(self):
        return self.name or f"Item {self.pk}"

    @property
    def has_image(self):
        return bool(self.image_key)


class OptionGroup(models.Model):
    """A set of choices attached to items (e.g. 'Size', 'Extra toppings')."""
    store = models.ForeignKey(
        'stores.Store',
        on_delete=models.CASCADE,
        related_name='option_groups'
    )
    name = models.CharField(max_length=100)
    min_select = models.PositiveIntegerField(
        default=0,
        help_text=_("Minimum number of choices a customer must pick. 0 makes the group optional.")
    )
    max_select = models.PositiveIntegerField(
        default=1,
        help_text=_("Maximum number of choices a customer may pick.")
    )
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['display_order', 'name']

    def __str__(self):
        return self.name


class OptionChoice(models.Model):
    option_group = models.ForeignKey(
        OptionGroup,
        on_delete=models.CASCADE,
        related_name='choices'
    )
    name = models.CharField(max_length=100)
    price_delta_cents = models.IntegerField(
        default=0,
        help_text=_("Added to the item price when selected. May be zero or negative.")
    )
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['display_order', 'name']

    def __str__(self):
        return f"{self.option_group.name}: {self.name}"
