from rest_framework import serializers

from orders.models import Order


class ReportParameterSerializer(serializers.Serializer):
    """Query parameters for /stats/. start and end are local calendar days, both optional."""

    store = serializers.IntegerField()
    start = serializers.DateField(required=False, allow_null=True, default=None)
    end = serializers.DateField(required=False, allow_null=True, default=None)

    def validate(self, data):
        if data["start"] and data["end"] and data["end"] < data["start"]:
            raise serializers.ValidationError("End date must be after start date.")
        return data


class DailyReportParameterSerializer(serializers.Serializer):
    store = serializers.IntegerField()
    start = serializers.DateField()
    end = serializers.DateField(required=False, allow_null=True, default=None)


class ExportRequestSerializer(serializers.Serializer):
    FORMAT_CHOICES = [("json", "JSON"), ("csv", "CSV"), ("xlsx", "Excel")]

    store = serializers.IntegerField()
    start = serializers.DateField()
    end = serializers.DateField()
    status = serializers.ChoiceField(choices=Order.OrderStatus.choices, required=False, allow_null=True, default=None)
    format = serializers.ChoiceField(choices=FORMAT_CHOICES, default="json")


class OrderStatsSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    total_revenue_cents = serializers.IntegerField()
    average_order_value_cents = serializers.IntegerField()
    cancelled_count = serializers.IntegerField()
    orders_by_status = serializers.DictField(child=serializers.IntegerField())
    orders_by_type = serializers.DictField(child=serializers.IntegerField())


class DailyOrderStatsSerializer(serializers.Serializer):
    date = serializers.DateField()
    count = serializers.IntegerField()
    total_revenue_cents = serializers.IntegerField()
    average_order_value_cents = serializers.IntegerField()
    cancelled_count = serializers.IntegerField()


class ExportOrderItemSerializer(serializers.Serializer):
    item_name = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price_cents = serializers.IntegerField()
    options_price_cents = serializers.IntegerField()
    line_total_cents = serializers.IntegerField()
    vat_rate_basis_points = serializers.IntegerField()
    vat_cents = serializers.IntegerField()
    options = serializers.ListField(child=serializers.CharField())


class ExportOrderSerializer(serializers.Serializer):
    order_id = serializers.CharField()
    pickup_number = serializers.IntegerField()
    # Kept in the store timezone, DateTimeField would convert to TIME_ZONE.
    created_at = serializers.SerializerMethodField()
    status = serializers.CharField()
    payment_status = serializers.CharField()
    order_type = serializers.CharField()
    customer_name = serializers.CharField()
    customer_email = serializers.CharField()
    currency = serializers.CharField()
    subtotal_cents = serializers.IntegerField()
    vat_cents = serializers.IntegerField()
    total_cents = serializers.IntegerField()
    cancel_reason = serializers.CharField()
    items = ExportOrderItemSerializer(many=True)

    def get_created_at(self, obj):
        return obj.created_at.isoformat()
