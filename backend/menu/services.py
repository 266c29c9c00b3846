from dataclasses import dataclass
from typing import List, Sequence, Tuple
import logging

from django.db import transaction

from core_backend.exceptions import NotFoundError, ValidationError
from orders.calculators import (
    ItemSnapshot,
    OptionChoiceSnapshot,
    OptionGroupSnapshot,
    OptionSelection,
    OrderLineInput,
)
from stores.services import StoreService
from .models import Item
from .validators import ItemValidationResult, ItemValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLine:
    """One line of a customer's cart, as submitted."""
    item_id: int
    quantity: int
    selections: Tuple[OptionSelection, ...] = ()


class ItemService:
    """Menu item lookups, publishability and price snapshots for ordering."""

    @staticmethod
    def get_item(item_id) -> Item:
        try:
            return Item.objects.select_related('store', 'category', 'vat_group').get(pk=item_id)
        except (Item.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(f"Item {item_id} not found", {"item_id": str(item_id)})

    @staticmethod
    def get_validation(item_id, merchant_id) -> ItemValidationResult:
        """Publishability report for an item owned by the calling merchant."""
        item = ItemService.get_item(item_id)
        StoreService.assert_owner(item.store, merchant_id)
        return ItemValidator.for_item(item)

    @staticmethod
    @transaction.atomic
    def set_active(item: Item, is_active: bool) -> Item:
        """
        Activate or deactivate an item.

        Items are never deleted once they may appear on orders, they are deactivated.
        Activation requires the item to be publishable.

        Raises:
            ValidationError: If activating an item that has validation issues
        """
        if is_active:
            result = ItemValidator.for_item(item)
            if not result.is_publishable:
                logger.warning(f"Refused to activate item {item.pk}: {result.codes}")
                raise ValidationError(
                    f"Item '{item.name or item.pk}' cannot be published",
                    {"item_id": item.pk, "issues": [str(code) for code in result.codes]},
                )

        if item.is_active != is_active:
            item.is_active = is_active
            item.save(update_fields=['is_active', 'updated_at'])
            logger.info(f"Item {item.pk} {'activated' if is_active else 'deactivated'}")
        return item

    @staticmethod
    def _option_group_snapshots(item: Item) -> Tuple[OptionGroupSnapshot, ...]:
        return tuple(
            OptionGroupSnapshot(
                id=group.pk,
                name=group.name,
                choices=tuple(
                    OptionChoiceSnapshot(
                        id=choice.pk,
                        name=choice.name,
                        price_delta_cents=choice.price_delta_cents,
                    )
                    for choice in group.choices.all()
                ),
                min_select=group.min_select,
                max_select=group.max_select,
            )
            for group in item.option_groups.all()
        )

    @staticmethod
    def resolve_snapshots(store, lines: Sequence[CartLine]) -> List[OrderLineInput]:
        """
        Capture current prices, VAT rates and option groups for each cart line.

        Only active, publishable items of the given store can be ordered.

        Raises:
            NotFoundError: If an item does not exist in this store
            ValidationError: If an item is inactive or not publishable
        """
        item_ids = {line.item_id for line in lines}
        items = {
            item.pk: item
            for item in Item.objects.filter(store=store, pk__in=item_ids)
            .select_related('category', 'vat_group')
            .prefetch_related('option_groups__choices')
        }

        snapshots = []
        for line in lines:
            item = items.get(line.item_id)
            if item is None:
                raise NotFoundError(
                    f"Item {line.item_id} not found in this store",
                    {"item_id": line.item_id},
                )
            if not item.is_active:
                raise ValidationError(
                    f"Item '{item.name}' is not available",
                    {"item_id": item.pk},
                )
            result = ItemValidator.for_item(item)
            if not result.is_publishable:
                raise ValidationError(
                    f"Item '{item.name or item.pk}' cannot be ordered",
                    {"item_id": item.pk, "issues": [str(code) for code in result.codes]},
                )

            snapshots.append(
                OrderLineInput(
                    item=ItemSnapshot(
                        item_id=item.pk,
                        name=item.name,
                        price_cents=item.price_cents,
                        vat_rate_basis_points=item.vat_group.rate_basis_points,
                    ),
                    quantity=line.quantity,
                    selections=tuple(line.selections),
                    option_groups=ItemService._option_group_snapshots(item),
                )
            )
        return snapshots
