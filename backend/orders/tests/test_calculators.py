"""
Pricing calculator tests.

These exercise the pure functions in orders.calculators with hand-built
snapshots; no database access is needed.
"""
import itertools

import pytest

from core_backend.exceptions import ValidationError
from orders.calculators import (
    ItemSnapshot,
    OptionChoiceSnapshot,
    OptionGroupSnapshot,
    OptionSelection,
    OrderLineInput,
    calculate_totals,
    price_line,
    price_order,
    vat_breakdown,
    vat_for_line,
)


SIZE = OptionGroupSnapshot(
    id=10,
    name="Size",
    choices=(
        OptionChoiceSnapshot(id=100, name="Small", price_delta_cents=-50),
        OptionChoiceSnapshot(id=101, name="Large", price_delta_cents=100),
    ),
    min_select=1,
    max_select=1,
)

TOPPINGS = OptionGroupSnapshot(
    id=20,
    name="Toppings",
    choices=(
        OptionChoiceSnapshot(id=200, name="Cheese", price_delta_cents=100),
        OptionChoiceSnapshot(id=201, name="Olives", price_delta_cents=50),
        OptionChoiceSnapshot(id=202, name="Basil", price_delta_cents=0),
    ),
    min_select=0,
    max_select=2,
)


def pizza(price_cents=500, vat=1900):
    return ItemSnapshot(item_id=1, name="Margherita", price_cents=price_cents, vat_rate_basis_points=vat)


def line(quantity=1, selections=(), item=None, groups=(SIZE, TOPPINGS)):
    return OrderLineInput(
        item=item or pizza(),
        quantity=quantity,
        selections=tuple(OptionSelection(group_id, choice_id) for group_id, choice_id in selections),
        option_groups=groups,
    )


LARGE = (10, 101)
SMALL = (10, 100)
CHEESE = (20, 200)
OLIVES = (20, 201)
BASIL = (20, 202)


class TestPriceLine:
    """Single line pricing"""

    def test_two_large_pizzas(self):
        """
        Quantity 2 at 5.00 with a +1.00 option and 19% VAT:
        line total 12.00, VAT 2.28.
        """
        item = price_line(line(quantity=2, selections=[LARGE]))

        assert item.unit_price_cents == 500
        assert item.options_price_cents == 100
        assert item.line_total_cents == 1200
        assert item.vat_rate_basis_points == 1900
        assert item.vat_cents == 228

    def test_options_are_summed(self):
        item = price_line(line(selections=[LARGE, CHEESE, OLIVES]))

        assert item.options_price_cents == 250
        assert item.line_total_cents == 750
        assert [option.choice_name for option in item.options] == ["Large", "Cheese", "Olives"]

    def test_negative_delta_reduces_price(self):
        item = price_line(line(selections=[SMALL]))

        assert item.options_price_cents == -50
        assert item.line_total_cents == 450

    def test_zero_delta_option_is_recorded(self):
        item = price_line(line(selections=[LARGE, BASIL]))

        assert item.options_price_cents == 100
        assert item.options[-1].choice_name == "Basil"

    @pytest.mark.parametrize("quantity", [1, 2, 3, 7, 50])
    @pytest.mark.parametrize("unit_price", [50, 99, 500, 1234])
    @pytest.mark.parametrize("selections", [[SMALL], [LARGE], [LARGE, CHEESE, OLIVES]])
    def test_line_total_is_reproducible(self, quantity, unit_price, selections):
        item = price_line(line(quantity=quantity, selections=selections, item=pizza(unit_price)))

        assert item.line_total_cents == quantity * (item.unit_price_cents + item.options_price_cents)

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", True, None])
    def test_bad_quantity(self, quantity):
        with pytest.raises(ValidationError):
            price_line(line(quantity=quantity, selections=[LARGE]))

    def test_negative_line_total_rejected(self):
        with pytest.raises(ValidationError):
            price_line(line(selections=[SMALL], item=pizza(price_cents=20)))

    def test_zero_line_total_is_allowed(self):
        item = price_line(line(selections=[SMALL], item=pizza(price_cents=50)))

        assert item.line_total_cents == 0
        assert item.vat_cents == 0

    def test_unknown_option_group(self):
        with pytest.raises(ValidationError) as exc_info:
            price_line(line(selections=[LARGE, (99, 200)]))

        assert exc_info.value.details["option_group_id"] == 99

    def test_choice_from_another_group(self):
        with pytest.raises(ValidationError):
            price_line(line(selections=[(10, 200)]))

    def test_same_choice_twice(self):
        with pytest.raises(ValidationError):
            price_line(line(selections=[LARGE, CHEESE, CHEESE]))

    def test_required_group_left_empty(self):
        with pytest.raises(ValidationError) as exc_info:
            price_line(line(selections=[CHEESE]))

        assert exc_info.value.details["selected"] == 0
        assert exc_info.value.details["min_select"] == 1

    def test_too_many_choices(self):
        with pytest.raises(ValidationError):
            price_line(line(selections=[LARGE, CHEESE, OLIVES, BASIL]))

    def test_two_choices_in_single_choice_group(self):
        with pytest.raises(ValidationError):
            price_line(line(selections=[LARGE, SMALL]))

    def test_item_without_option_groups(self):
        item = price_line(line(groups=()))

        assert item.options == ()
        assert item.line_total_cents == 500


class TestVatForLine:
    """VAT per line, half-up to the cent"""

    @pytest.mark.parametrize("line_total,rate,expected", [
        (1200, 1900, 228),
        (1000, 700, 70),
        (50, 1900, 10),       # 9.5 rounds up
        (150, 700, 11),       # 10.5 rounds up
        (149, 700, 10),       # 10.43 rounds down
        (999, 0, 0),
        (999, 10000, 999),
        (0, 1900, 0),
    ])
    def test_rounding(self, line_total, rate, expected):
        assert vat_for_line(line_total, rate) == expected

    @pytest.mark.parametrize("rate", [-1, 10001, None, 19.0])
    def test_rate_out_of_range(self, rate):
        with pytest.raises(ValidationError):
            vat_for_line(1000, rate)


class TestPriceOrder:
    """Whole-cart pricing and totals"""

    def test_single_line_order(self):
        priced = price_order([line(quantity=2, selections=[LARGE])])

        assert priced.totals.subtotal_cents == 1200
        assert priced.totals.vat_cents == 228
        assert priced.totals.total_cents == 1428

    def test_empty_cart(self):
        with pytest.raises(ValidationError):
            price_order([])

    def test_none_cart(self):
        with pytest.raises(ValidationError):
            price_order(None)

    def test_vat_is_rounded_per_line_then_summed(self):
        """Two 0.50 lines at 19% give 0.10 + 0.10, not round(0.19)."""
        cheap = ItemSnapshot(item_id=2, name="Dip", price_cents=50, vat_rate_basis_points=1900)
        lines = [line(item=cheap, groups=()), line(item=cheap, groups=())]

        totals = price_order(lines).totals

        assert totals.subtotal_cents == 100
        assert totals.vat_cents == 20
        assert totals.total_cents == 120

    def test_total_is_subtotal_plus_vat(self):
        drink = ItemSnapshot(item_id=3, name="Lemonade", price_cents=250, vat_rate_basis_points=700)
        lines = [
            line(quantity=3, selections=[LARGE, CHEESE]),
            line(quantity=1, item=drink, groups=()),
            line(quantity=2, selections=[SMALL, OLIVES, BASIL]),
        ]

        totals = price_order(lines).totals

        assert totals.total_cents == totals.subtotal_cents + totals.vat_cents
        assert totals.subtotal_cents >= 0
        assert totals.vat_cents >= 0

    def test_line_order_does_not_change_totals(self):
        drink = ItemSnapshot(item_id=3, name="Lemonade", price_cents=250, vat_rate_basis_points=700)
        lines = [
            line(quantity=3, selections=[LARGE, CHEESE]),
            line(quantity=1, item=drink, groups=()),
            line(quantity=2, selections=[SMALL]),
        ]
        expected = price_order(lines).totals

        for permutation in itertools.permutations(lines):
            assert price_order(list(permutation)).totals == expected

    def test_one_bad_line_rejects_the_order(self):
        with pytest.raises(ValidationError):
            price_order([line(selections=[LARGE]), line(quantity=0, selections=[LARGE])])

    def test_calculate_totals_of_nothing(self):
        totals = calculate_totals([])

        assert (totals.subtotal_cents, totals.vat_cents, totals.total_cents) == (0, 0, 0)


class TestVatBreakdown:

    def test_groups_by_rate_lowest_first(self):
        drink = ItemSnapshot(item_id=3, name="Lemonade", price_cents=250, vat_rate_basis_points=700)
        priced = price_order([
            line(quantity=2, selections=[LARGE]),
            line(item=drink, groups=()),
            line(item=drink, groups=()),
        ])

        breakdown = vat_breakdown(priced.items)

        assert [(v.rate_basis_points, v.net_cents, v.vat_cents, v.gross_cents) for v in breakdown] == [
            (700, 500, 36, 536),
            (1900, 1200, 228, 1428),
        ]
        assert sum(v.gross_cents for v in breakdown) == priced.totals.total_cents

    def test_empty(self):
        assert vat_breakdown([]) == []
