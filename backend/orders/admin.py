from django.contrib import admin
from .models import Order, OrderItem, OrderItemOption


class OrderItemOptionInline(admin.TabularInline):
    model = OrderItemOption
    extra = 0
    readonly_fields = ('option_group_name', 'choice_name', 'price_delta_cents')
    fields = readonly_fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = (
        "item_name", "quantity", "unit_price_cents", "options_price_cents",
        "line_total_cents", "vat_rate_basis_points", "vat_cents",
    )
    fields = readonly_fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Order model.

    Orders are read-only here; status changes go through OrderService so the
    transition table and payment side effects always apply.
    """

    list_display = (
        "pickup_number", "store", "status", "payment_status", "order_type",
        "total_cents", "created_at",
    )
    list_filter = ("status", "payment_status", "order_type", "store")
    search_fields = ("id", "customer_name", "customer_email", "idempotency_key")
    readonly_fields = [field.name for field in Order._meta.fields]
    inlines = [OrderItemInline]

    def has_add_permission(self, request):
        return False


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ("item_name", "order", "quantity", "line_total_cents")
    readonly_fields = [field.name for field in OrderItem._meta.fields]
    inlines = [OrderItemOptionInline]
