"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from core_backend.config import ordering_settings


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def reset_ordering_settings():
    """
    Re-read settings.ORDERING around each test.

    Tests that use override_settings(ORDERING=...) would otherwise leave the
    cached values of the ordering_settings singleton behind for the next test.
    """
    ordering_settings.reload()
    yield
    ordering_settings.reload()


@pytest.fixture(autouse=True)
def clear_cache_after_test():
    """
    Clear cache after each test to prevent cache pollution.
    """
    yield
    cache.clear()


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """Unauthenticated DRF API client"""
    return APIClient()


@pytest.fixture
def merchant_client(merchant, merchant_user):
    """API client authenticated as the owner of the main test merchant"""
    client = APIClient()
    client.force_authenticate(user=merchant_user)
    return client


@pytest.fixture
def other_merchant_client(other_merchant, other_merchant_user):
    """API client authenticated as the owner of other_merchant"""
    client = APIClient()
    client.force_authenticate(user=other_merchant_user)
    return client


# Import all fixtures from fixtures.py to make them available globally
from core_backend.tests.fixtures import *  # noqa: E402, F401, F403
