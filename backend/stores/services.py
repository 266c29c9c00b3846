from django.db import transaction
import logging

from core_backend.config import ordering_settings
from core_backend.exceptions import ForbiddenError, NotFoundError
from .models import Store, StoreCounter

logger = logging.getLogger(__name__)


class StoreService:
    """Store lookup, ownership checks and pickup-number allocation."""

    @staticmethod
    def get_store(store_id) -> Store:
        try:
            return Store.objects.select_related('merchant').get(pk=store_id)
        except (Store.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(f"Store {store_id} not found", {"store_id": str(store_id)})

    @staticmethod
    def get_owned_store(store_id, merchant_id) -> Store:
        """
        Load a store and verify that the calling merchant owns it.

        Raises:
            NotFoundError: If the store does not exist
            ForbiddenError: If the store belongs to another merchant
        """
        store = StoreService.get_store(store_id)
        StoreService.assert_owner(store, merchant_id)
        return store

    @staticmethod
    def assert_owner(store: Store, merchant_id) -> None:
        if merchant_id is None or str(store.merchant_id) != str(merchant_id):
            logger.warning(
                f"Merchant {merchant_id} denied access to store {store.pk} "
                f"(owned by {store.merchant_id})"
            )
            raise ForbiddenError("You do not have access to this store")

    @staticmethod
    @transaction.atomic
    def next_pickup_number(store: Store) -> int:
        """
        Hand out the store's next pickup number.

        Numbers cycle 1, 2, ... MODULO-1, 0, 1, ... The counter row is locked for
        the rest of the surrounding transaction.
        """
        StoreCounter.objects.get_or_create(store=store)
        counter = StoreCounter.objects.select_for_update().get(store=store)

        counter.last_pickup_number = (
            counter.last_pickup_number + 1
        ) % ordering_settings.pickup_number_modulo
        counter.save(update_fields=['last_pickup_number'])
        return counter.last_pickup_number
