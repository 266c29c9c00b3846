"""
Orders serializers package - modular serializer layer.
"""

# Order item serializers
from .order_item_serializers import (
    OrderItemOptionSerializer,
    OrderItemSerializer,
)

# Order serializers
from .order_serializers import (
    CartLineSerializer,
    OptionSelectionSerializer,
    OrderCreateSerializer,
    OrderSerializer,
)

# Status serializers
from .status_serializers import CancelOrderSerializer, UpdateOrderStatusSerializer

__all__ = [
    # Order items
    "OrderItemOptionSerializer",
    "OrderItemSerializer",
    # Orders
    "CartLineSerializer",
    "OptionSelectionSerializer",
    "OrderCreateSerializer",
    "OrderSerializer",
    # Status
    "CancelOrderSerializer",
    "UpdateOrderStatusSerializer",
]
