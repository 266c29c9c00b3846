from rest_framework import serializers


class UpdateOrderStatusSerializer(serializers.Serializer):
    """
    Only checks that a status was sent. Whether the value is a known status and a
    legal successor is decided by the order state machine.
    """

    status = serializers.CharField()


class CancelOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
