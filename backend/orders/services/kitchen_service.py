from django.db.models import Q
import logging

from orders.models import Order
from stores.services import StoreService

logger = logging.getLogger(__name__)


class KitchenService:
    """Service for kitchen-related operations - the queue of orders to prepare."""

    @staticmethod
    def kitchen_visible_filter() -> Q:
        """Queryset form of Order.is_kitchen_visible."""
        return ~Q(status__in=Order.TERMINAL_STATUSES) & (
            Q(payment_status=Order.PaymentStatus.PAID) | ~Q(status=Order.OrderStatus.CREATED)
        )

    @staticmethod
    def get_queue(store, merchant_id):
        """
        Orders the kitchen should be working on at a store, oldest first.

        Raises:
            ForbiddenError: If the merchant does not own the store
        """
        StoreService.assert_owner(store, merchant_id)
        return list(
            Order.objects.filter(store=store)
            .filter(KitchenService.kitchen_visible_filter())
            .prefetch_related('items__options')
            .order_by('created_at')
        )
