from rest_framework import serializers
from orders.models import OrderItem, OrderItemOption


class OrderItemOptionSerializer(serializers.ModelSerializer):
    choice_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = OrderItemOption
        fields = [
            "option_group_id",
            "option_group_name",
            "choice_id",
            "choice_name",
            "price_delta_cents",
        ]
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    item_id = serializers.IntegerField(read_only=True, allow_null=True)
    options = OrderItemOptionSerializer(many=True, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "item_id",
            "item_name",
            "quantity",
            "unit_price_cents",
            "options_price_cents",
            "line_total_cents",
            "vat_rate_basis_points",
            "vat_cents",
            "options",
        ]
        read_only_fields = fields
