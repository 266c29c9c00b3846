"""
Orders services package - service layer for order management.

- OrderService: Order lifecycle (create, transition, cancel, lookups)
- KitchenService: Kitchen queue
"""

# Core order operations
from .order_service import CreateOrderInput, OrderService

# Kitchen operations
from .kitchen_service import KitchenService

__all__ = [
    "CreateOrderInput",
    "OrderService",
    "KitchenService",
]
