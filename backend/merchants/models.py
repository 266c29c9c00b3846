import uuid
from django.conf import settings
from django.db import models


class Merchant(models.Model):
    """
    Root entity for multi-tenancy.
    Each restaurant business is a merchant; it owns one or more stores.

    Every ownership check in the ordering engine resolves to "does this merchant
    own the store the resource belongs to".
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(
        max_length=255,
        help_text="Display name for the merchant (e.g., Joe's Pizza)"
    )
    slug = models.SlugField(
        unique=True,
        help_text="URL-safe identifier for the merchant"
    )
    owner = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="merchant",
        help_text="User account that administers this merchant"
    )
    contact_email = models.EmailField(blank=True)

    is_active = models.BooleanField(
        default=True,
        help_text="Inactive merchants cannot take orders"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
