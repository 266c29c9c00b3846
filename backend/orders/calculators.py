"""
Order pricing calculator.

Pure functions that turn cart lines into priced order lines and order totals.
Every price, option delta and VAT rate is passed in as a snapshot, so pricing an
order never reads the live menu and a stored order never drifts when prices change.

Money Rules:
- All amounts are integers in minor units (cents)
- line_total = quantity * (unit_price + options_price)
- VAT is computed per line on line_total and rounded half-up, then summed
- Prices are VAT-exclusive: total = subtotal + vat

Usage:
    from orders.calculators import price_order
    priced = price_order(lines)
    priced.totals.total_cents
"""

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from core_backend.exceptions import ValidationError
from payments.money import BASIS_POINTS_PER_UNIT, basis_points_of


# === SNAPSHOTS (inputs) ===


@dataclass(frozen=True)
class OptionChoiceSnapshot:
    id: int
    name: str
    price_delta_cents: int


@dataclass(frozen=True)
class OptionGroupSnapshot:
    id: int
    name: str
    choices: Tuple[OptionChoiceSnapshot, ...]
    min_select: int = 0
    max_select: int = 1


@dataclass(frozen=True)
class ItemSnapshot:
    item_id: int
    name: str
    price_cents: int
    vat_rate_basis_points: int


@dataclass(frozen=True)
class OptionSelection:
    option_group_id: int
    choice_id: int


@dataclass(frozen=True)
class OrderLineInput:
    item: ItemSnapshot
    quantity: int
    selections: Tuple[OptionSelection, ...] = ()
    # Every option group attached to the item, selected or not, so min_select is enforced.
    option_groups: Tuple[OptionGroupSnapshot, ...] = ()


# === RESULTS ===


@dataclass(frozen=True)
class CalculatedOption:
    option_group_id: int
    option_group_name: str
    choice_id: int
    choice_name: str
    price_delta_cents: int


@dataclass(frozen=True)
class CalculatedOrderItem:
    item_id: int
    name: str
    quantity: int
    unit_price_cents: int
    options_price_cents: int
    line_total_cents: int
    vat_rate_basis_points: int
    vat_cents: int
    options: Tuple[CalculatedOption, ...] = ()


@dataclass(frozen=True)
class OrderTotals:
    subtotal_cents: int
    vat_cents: int
    total_cents: int


@dataclass(frozen=True)
class PricedOrder:
    items: Tuple[CalculatedOrderItem, ...]
    totals: OrderTotals


@dataclass(frozen=True)
class VatLine:
    rate_basis_points: int
    net_cents: int
    vat_cents: int
    gross_cents: int


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def vat_for_line(line_total_cents: int, vat_rate_basis_points: int) -> int:
    """VAT on a line total, rounded half-up to the nearest cent."""
    if not _is_int(vat_rate_basis_points) or not 0 <= vat_rate_basis_points <= BASIS_POINTS_PER_UNIT:
        raise ValidationError(
            f"VAT rate must be between 0 and {BASIS_POINTS_PER_UNIT} basis points",
            {"vat_rate_basis_points": vat_rate_basis_points},
        )
    return basis_points_of(line_total_cents, vat_rate_basis_points)


def _resolve_options(line: OrderLineInput) -> Tuple[CalculatedOption, ...]:
    groups: Dict[int, OptionGroupSnapshot] = {group.id: group for group in line.option_groups}
    resolved: List[CalculatedOption] = []
    per_group: Counter = Counter()
    seen = set()

    for selection in line.selections:
        group = groups.get(selection.option_group_id)
        if group is None:
            raise ValidationError(
                f"Option group {selection.option_group_id} is not available for '{line.item.name}'",
                {"item_id": line.item.item_id, "option_group_id": selection.option_group_id},
            )

        choice = next((c for c in group.choices if c.id == selection.choice_id), None)
        if choice is None:
            raise ValidationError(
                f"Choice {selection.choice_id} does not belong to option group '{group.name}'",
                {"option_group_id": group.id, "choice_id": selection.choice_id},
            )

        key = (group.id, choice.id)
        if key in seen:
            raise ValidationError(
                f"Choice '{choice.name}' selected more than once",
                {"option_group_id": group.id, "choice_id": choice.id},
            )
        seen.add(key)
        per_group[group.id] += 1

        resolved.append(
            CalculatedOption(
                option_group_id=group.id,
                option_group_name=group.name,
                choice_id=choice.id,
                choice_name=choice.name,
                price_delta_cents=choice.price_delta_cents,
            )
        )

    for group in line.option_groups:
        count = per_group[group.id]
        if count < group.min_select or count > group.max_select:
            raise ValidationError(
                f"Option group '{group.name}' requires between {group.min_select} "
                f"and {group.max_select} selections, got {count}",
                {
                    "option_group_id": group.id,
                    "min_select": group.min_select,
                    "max_select": group.max_select,
                    "selected": count,
                },
            )

    return tuple(resolved)


def price_line(line: OrderLineInput) -> CalculatedOrderItem:
    """
    Price a single cart line.

    Raises:
        ValidationError: bad quantity, VAT rate or option selection, or a negative line total
    """
    if not _is_int(line.quantity) or line.quantity < 1:
        raise ValidationError(
            "Quantity must be a positive integer",
            {"item_id": line.item.item_id, "quantity": line.quantity},
        )

    options = _resolve_options(line)
    options_price_cents = sum(option.price_delta_cents for option in options)
    unit_price_cents = line.item.price_cents
    line_total_cents = line.quantity * (unit_price_cents + options_price_cents)

    if line_total_cents < 0:
        raise ValidationError(
            f"Line total for '{line.item.name}' cannot be negative",
            {"item_id": line.item.item_id, "line_total_cents": line_total_cents},
        )

    return CalculatedOrderItem(
        item_id=line.item.item_id,
        name=line.item.name,
        quantity=line.quantity,
        unit_price_cents=unit_price_cents,
        options_price_cents=options_price_cents,
        line_total_cents=line_total_cents,
        vat_rate_basis_points=line.item.vat_rate_basis_points,
        vat_cents=vat_for_line(line_total_cents, line.item.vat_rate_basis_points),
        options=options,
    )


def calculate_totals(items: Iterable[CalculatedOrderItem]) -> OrderTotals:
    items = list(items)
    subtotal_cents = sum(item.line_total_cents for item in items)
    vat_cents = sum(item.vat_cents for item in items)
    return OrderTotals(
        subtotal_cents=subtotal_cents,
        vat_cents=vat_cents,
        total_cents=subtotal_cents + vat_cents,
    )


def price_order(lines: Sequence[OrderLineInput]) -> PricedOrder:
    """
    Price a whole cart.

    Raises:
        ValidationError: if the cart is empty or any line is invalid
    """
    lines = list(lines or [])
    if not lines:
        raise ValidationError("Order must contain at least one item")

    items = tuple(price_line(line) for line in lines)
    return PricedOrder(items=items, totals=calculate_totals(items))


def vat_breakdown(items: Iterable) -> List[VatLine]:
    """
    Group VAT by rate for receipts and exports, lowest rate first.

    Accepts CalculatedOrderItem values or stored OrderItem rows (anything with
    line_total_cents, vat_cents and vat_rate_basis_points).
    """
    net: Dict[int, int] = defaultdict(int)
    vat: Dict[int, int] = defaultdict(int)
    for item in items:
        net[item.vat_rate_basis_points] += item.line_total_cents
        vat[item.vat_rate_basis_points] += item.vat_cents

    return [
        VatLine(
            rate_basis_points=rate,
            net_cents=net[rate],
            vat_cents=vat[rate],
            gross_cents=net[rate] + vat[rate],
        )
        for rate in sorted(net)
    ]
