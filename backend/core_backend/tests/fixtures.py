"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like merchants, stores, menu items and orders.
"""
import pytest
from django.contrib.auth import get_user_model

from merchants.models import Merchant
from stores.models import Store
from menu.models import Category, Item, OptionChoice, OptionGroup, VatGroup
from menu.services import CartLine
from orders.calculators import OptionSelection
from orders.services import CreateOrderInput, OrderService


# ============================================================================
# MERCHANT FIXTURES
# ============================================================================

@pytest.fixture
def merchant_user(db):
    """User account that administers the main test merchant"""
    return get_user_model().objects.create_user(
        username='pizza-owner',
        email='owner@pizza.example',
        password='test-password-123'
    )


@pytest.fixture
def merchant(merchant_user):
    """Create test merchant (Pizza Place)"""
    return Merchant.objects.create(
        name='Pizza Place',
        slug='pizza-place',
        owner=merchant_user,
        is_active=True
    )


@pytest.fixture
def other_merchant_user(db):
    return get_user_model().objects.create_user(
        username='burger-owner',
        email='owner@burger.example',
        password='test-password-123'
    )


@pytest.fixture
def other_merchant(other_merchant_user):
    """Create a second merchant (Burger Joint) for ownership tests"""
    return Merchant.objects.create(
        name='Burger Joint',
        slug='burger-joint',
        owner=other_merchant_user,
        is_active=True
    )


# ============================================================================
# STORE FIXTURES
# ============================================================================

@pytest.fixture
def store(merchant):
    """Main test store (UTC, EUR)"""
    return Store.objects.create(
        merchant=merchant,
        name='Downtown',
        slug='downtown',
        timezone='UTC',
        currency='EUR',
    )


@pytest.fixture
def helsinki_store(merchant):
    """Store two hours ahead of UTC in winter, for day-bucketing tests"""
    return Store.objects.create(
        merchant=merchant,
        name='Helsinki',
        slug='helsinki',
        timezone='Europe/Helsinki',
        currency='EUR',
    )


@pytest.fixture
def other_store(other_merchant):
    """Store owned by other_merchant"""
    return Store.objects.create(
        merchant=other_merchant,
        name='Burger Central',
        slug='burger-central',
        timezone='UTC',
        currency='EUR',
    )


# ============================================================================
# MENU FIXTURES
# ============================================================================

@pytest.fixture
def vat_group(merchant):
    """Standard VAT rate, 19%"""
    return VatGroup.objects.create(
        merchant=merchant,
        code='A',
        name='Standard',
        rate_basis_points=1900,
    )


@pytest.fixture
def reduced_vat_group(merchant):
    """Reduced VAT rate, 7%"""
    return VatGroup.objects.create(
        merchant=merchant,
        code='B',
        name='Reduced',
        rate_basis_points=700,
    )


@pytest.fixture
def category(store):
    return Category.objects.create(store=store, name='Pizza')


@pytest.fixture
def inactive_category(store):
    return Category.objects.create(store=store, name='Seasonal', is_active=False)


@pytest.fixture
def size_group(store):
    """Required single choice: Small (+0) or Large (+1.00)"""
    group = OptionGroup.objects.create(store=store, name='Size', min_select=1, max_select=1)
    OptionChoice.objects.create(option_group=group, name='Small', price_delta_cents=0, display_order=0)
    OptionChoice.objects.create(option_group=group, name='Large', price_delta_cents=100, display_order=1)
    return group


@pytest.fixture
def toppings_group(store):
    """Optional, up to two: Cheese (+1.00), Olives (+0.50)"""
    group = OptionGroup.objects.create(store=store, name='Toppings', min_select=0, max_select=2)
    OptionChoice.objects.create(option_group=group, name='Cheese', price_delta_cents=100, display_order=0)
    OptionChoice.objects.create(option_group=group, name='Olives', price_delta_cents=50, display_order=1)
    return group


@pytest.fixture
def item(store, category, vat_group, size_group, toppings_group):
    """Active, publishable pizza with a size and toppings"""
    pizza = Item.objects.create(
        store=store,
        category=category,
        vat_group=vat_group,
        name='Margherita',
        price_cents=500,
        image_key='items/margherita.png',
        is_active=True,
    )
    pizza.option_groups.set([size_group, toppings_group])
    return pizza


@pytest.fixture
def drink(store, category, reduced_vat_group):
    """Active, publishable item without options at the reduced rate"""
    return Item.objects.create(
        store=store,
        category=category,
        vat_group=reduced_vat_group,
        name='Lemonade',
        price_cents=250,
        image_key='items/lemonade.png',
        is_active=True,
    )


@pytest.fixture
def large(size_group):
    return size_group.choices.get(name='Large')


@pytest.fixture
def small(size_group):
    return size_group.choices.get(name='Small')


@pytest.fixture
def cheese(toppings_group):
    return toppings_group.choices.get(name='Cheese')


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def pizza_line(item, size_group, large):
    """One large Margherita"""
    return CartLine(
        item_id=item.pk,
        quantity=1,
        selections=(OptionSelection(option_group_id=size_group.pk, choice_id=large.pk),),
    )


@pytest.fixture
def make_order(store, pizza_line):
    """
    Factory fixture creating orders through OrderService.

    Usage:
        order = make_order()
        order = make_order(lines=[...], idempotency_key='abc')
    """

    def _make_order(lines=None, target_store=None, **kwargs):
        data = CreateOrderInput(
            store_id=(target_store or store).pk,
            lines=tuple(lines if lines is not None else [pizza_line]),
            **kwargs
        )
        return OrderService.create_order(data)

    return _make_order


@pytest.fixture
def order(make_order):
    """A freshly created order (CREATED, payment PENDING)"""
    return make_order()
