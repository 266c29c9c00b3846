from rest_framework import serializers

from menu.services import CartLine
from orders.calculators import OptionSelection, vat_breakdown
from orders.models import Order
from orders.services import CreateOrderInput
from stores.models import OrderType
from .order_item_serializers import OrderItemSerializer


class OrderSerializer(serializers.ModelSerializer):
    """Read representation of an order with its priced lines."""

    items = OrderItemSerializer(many=True, read_only=True)
    store_id = serializers.IntegerField(read_only=True)
    merchant_id = serializers.UUIDField(read_only=True)
    is_kitchen_visible = serializers.BooleanField(read_only=True)
    vat_breakdown = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "store_id",
            "merchant_id",
            "pickup_number",
            "status",
            "payment_status",
            "order_type",
            "customer_name",
            "customer_email",
            "customer_phone",
            "customer_notes",
            "currency",
            "subtotal_cents",
            "vat_cents",
            "total_cents",
            "vat_breakdown",
            "items",
            "cancel_reason",
            "is_kitchen_visible",
            "version",
            "created_at",
            "confirmed_at",
            "preparing_at",
            "ready_at",
            "completed_at",
            "cancelled_at",
        ]
        read_only_fields = fields

    def get_vat_breakdown(self, obj):
        return [
            {
                "rate_basis_points": line.rate_basis_points,
                "net_cents": line.net_cents,
                "vat_cents": line.vat_cents,
                "gross_cents": line.gross_cents,
            }
            for line in vat_breakdown(obj.items.all())
        ]


class OptionSelectionSerializer(serializers.Serializer):
    option_group_id = serializers.IntegerField()
    choice_id = serializers.IntegerField()


class CartLineSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
    # Range checks belong to the pricing calculator so every caller gets the same errors.
    quantity = serializers.IntegerField()
    selections = OptionSelectionSerializer(many=True, required=False, default=list)


class OrderCreateSerializer(serializers.Serializer):
    """
    Validates the shape of a create request. Business rules (empty cart, item
    availability, option counts) are enforced by OrderService.
    """

    store_id = serializers.IntegerField()
    order_type = serializers.ChoiceField(choices=OrderType.choices, default=OrderType.TAKEAWAY)
    lines = CartLineSerializer(many=True, allow_empty=True)
    customer_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    customer_email = serializers.EmailField(required=False, allow_blank=True, default="")
    customer_phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    customer_notes = serializers.CharField(required=False, allow_blank=True, default="")
    idempotency_key = serializers.CharField(max_length=100, required=False, allow_null=True, default=None)

    def to_input(self) -> CreateOrderInput:
        data = self.validated_data
        return CreateOrderInput(
            store_id=data["store_id"],
            lines=tuple(
                CartLine(
                    item_id=line["item_id"],
                    quantity=line["quantity"],
                    selections=tuple(
                        OptionSelection(
                            option_group_id=selection["option_group_id"],
                            choice_id=selection["choice_id"],
                        )
                        for selection in line.get("selections", [])
                    ),
                )
                for line in data["lines"]
            ),
            order_type=data["order_type"],
            customer_name=data["customer_name"],
            customer_email=data["customer_email"],
            customer_phone=data["customer_phone"],
            customer_notes=data["customer_notes"],
            idempotency_key=data["idempotency_key"] or None,
        )
