"""
Menu API integration tests: item validation report and publishing.
"""
import pytest
from django.urls import reverse

from menu.models import Item


@pytest.mark.django_db
class TestItemValidationEndpoint:

    def test_owner_sees_report(self, merchant_client, store, category, vat_group):
        draft = Item.objects.create(
            store=store, category=category, vat_group=vat_group, name="Calzone", price_cents=0
        )

        response = merchant_client.get(reverse("menu:item-validation", args=[draft.pk]))

        assert response.status_code == 200
        assert response.data == {
            "issues": [
                {"code": "ZERO_PRICE", "field": "price_cents"},
                {"code": "MISSING_IMAGE", "field": "image"},
            ],
            "has_issues": True,
            "is_publishable": False,
        }

    def test_other_merchant_is_forbidden(self, other_merchant, other_merchant_client, item):
        response = other_merchant_client.get(reverse("menu:item-validation", args=[item.pk]))

        assert response.status_code == 403
        assert response.data["error"] == "forbidden"

    def test_unknown_item(self, merchant_client):
        response = merchant_client.get(reverse("menu:item-validation", args=[999999]))

        assert response.status_code == 404

    def test_anonymous_is_rejected(self, api_client, item):
        response = api_client.get(reverse("menu:item-validation", args=[item.pk]))

        assert response.status_code in (401, 403)


@pytest.mark.django_db
class TestItemActiveEndpoint:

    def test_deactivate(self, merchant_client, item):
        response = merchant_client.post(
            reverse("menu:item-active", args=[item.pk]), {"is_active": False}, format="json"
        )

        assert response.status_code == 200
        assert response.data["is_active"] is False

    def test_activating_unpublishable_item_returns_issues(self, merchant_client, store, vat_group):
        draft = Item.objects.create(store=store, vat_group=vat_group, name="Soup", price_cents=400)

        response = merchant_client.post(
            reverse("menu:item-active", args=[draft.pk]), {"is_active": True}, format="json"
        )

        assert response.status_code == 400
        assert response.data["error"] == "validation_error"
        assert response.data["issues"] == ["MISSING_CATEGORY", "MISSING_IMAGE"]

    def test_missing_flag(self, merchant_client, item):
        response = merchant_client.post(reverse("menu:item-active", args=[item.pk]), {}, format="json")

        assert response.status_code == 400
