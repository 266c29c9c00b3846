"""
Publishability rules for menu items.

An item may be shown to customers and added to orders only when every rule in
``ITEM_RULES`` passes. Rules are evaluated independently and in tuple order, so the
order of ``ITEM_RULES`` is the order issues are reported in. Evaluation never raises:
malformed input shows up as issues.
"""
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from django.db import models


class ItemIssueCode(models.TextChoices):
    MISSING_NAME = "MISSING_NAME", "Item has no name"
    MISSING_VAT_GROUP = "MISSING_VAT_GROUP", "Item has no VAT group"
    MISSING_CATEGORY = "MISSING_CATEGORY", "Item has no category"
    ZERO_PRICE = "ZERO_PRICE", "Item price is zero or negative"
    MISSING_IMAGE = "MISSING_IMAGE", "Item has no image"
    CATEGORY_INACTIVE = "CATEGORY_INACTIVE", "Item's category is not active"


@dataclass(frozen=True)
class ItemForValidation:
    name: Optional[str]
    vat_group_id: Optional[int]
    category_id: Optional[int]
    price_cents: Optional[int]
    has_image: bool


@dataclass(frozen=True)
class ValidationContext:
    # None means the caller could not tell; it is reported like an inactive category.
    category_active: Optional[bool] = None


@dataclass(frozen=True)
class ItemIssue:
    code: str
    field: Optional[str] = None


@dataclass(frozen=True)
class ItemValidationResult:
    issues: Tuple[ItemIssue, ...]

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    @property
    def is_publishable(self) -> bool:
        return not self.issues

    @property
    def codes(self):
        return [issue.code for issue in self.issues]

    def to_dict(self):
        return {
            "issues": [{"code": issue.code, "field": issue.field} for issue in self.issues],
            "has_issues": self.has_issues,
            "is_publishable": self.is_publishable,
        }


@dataclass(frozen=True)
class ItemRule:
    code: str
    field: Optional[str]
    predicate: Callable[[ItemForValidation, ValidationContext], bool]


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_non_positive_price(value) -> bool:
    # bool is an int subclass; True is not a price.
    if isinstance(value, bool) or not isinstance(value, int):
        return True
    return value <= 0


ITEM_RULES: Tuple[ItemRule, ...] = (
    ItemRule(
        ItemIssueCode.MISSING_NAME,
        "name",
        lambda item, ctx: _is_blank(item.name),
    ),
    ItemRule(
        ItemIssueCode.MISSING_VAT_GROUP,
        "vat_group_id",
        lambda item, ctx: item.vat_group_id is None,
    ),
    ItemRule(
        ItemIssueCode.MISSING_CATEGORY,
        "category_id",
        lambda item, ctx: item.category_id is None,
    ),
    ItemRule(
        ItemIssueCode.ZERO_PRICE,
        "price_cents",
        lambda item, ctx: _is_non_positive_price(item.price_cents),
    ),
    ItemRule(
        ItemIssueCode.MISSING_IMAGE,
        "image",
        lambda item, ctx: item.has_image is not True,
    ),
    # Only meaningful once the item has a category; MISSING_CATEGORY covers the rest.
    ItemRule(
        ItemIssueCode.CATEGORY_INACTIVE,
        "category_id",
        lambda item, ctx: item.category_id is not None and ctx.category_active is not True,
    ),
)


def validate_item(item: ItemForValidation, context: Optional[ValidationContext] = None) -> ItemValidationResult:
    """
    Run every publishability rule against an item snapshot.

    Pure and deterministic: the same input always produces the same result.
    """
    if context is None:
        context = ValidationContext()

    issues = tuple(
        ItemIssue(code=rule.code, field=rule.field)
        for rule in ITEM_RULES
        if rule.predicate(item, context)
    )
    return ItemValidationResult(issues=issues)


class ItemValidator:
    """Bridges Item model instances to the pure rule engine."""

    @staticmethod
    def snapshot(item) -> Tuple[ItemForValidation, ValidationContext]:
        snapshot = ItemForValidation(
            name=item.name,
            vat_group_id=item.vat_group_id,
            category_id=item.category_id,
            price_cents=item.price_cents,
            has_image=item.has_image,
        )
        category = item.category if item.category_id is not None else None
        context = ValidationContext(category_active=category.is_active if category else None)
        return snapshot, context

    @staticmethod
    def for_item(item) -> ItemValidationResult:
        snapshot, context = ItemValidator.snapshot(item)
        return validate_item(snapshot, context)
