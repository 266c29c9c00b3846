"""
Orders views package - view layer with action mixins.
"""

from .order_viewset import OrderViewSet

__all__ = [
    'OrderViewSet',
]
