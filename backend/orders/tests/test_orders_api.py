"""
Orders API integration tests.

Checks request validation and that every service error maps to its HTTP
status through ordering_exception_handler.
"""
import uuid

import pytest
from django.urls import reverse

from orders.models import Order

S = Order.OrderStatus


def create_payload(store, item, size_group, choice, **overrides):
    payload = {
        "store_id": store.pk,
        "order_type": "takeaway",
        "customer_name": "Ada",
        "lines": [
            {
                "item_id": item.pk,
                "quantity": 2,
                "selections": [{"option_group_id": size_group.pk, "choice_id": choice.pk}],
            }
        ],
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
class TestCreateOrderEndpoint:
    """Storefront checkout is public"""

    def test_create(self, api_client, store, item, size_group, large):
        response = api_client.post(
            reverse("orders:order-list"), create_payload(store, item, size_group, large), format="json"
        )

        assert response.status_code == 201
        data = response.data
        assert data["status"] == "CREATED"
        assert data["store_id"] == store.pk
        assert (data["subtotal_cents"], data["vat_cents"], data["total_cents"]) == (1200, 228, 1428)
        assert data["vat_breakdown"] == [
            {"rate_basis_points": 1900, "net_cents": 1200, "vat_cents": 228, "gross_cents": 1428}
        ]
        [line] = data["items"]
        assert line["item_id"] == item.pk
        assert line["line_total_cents"] == 1200
        assert line["options"][0]["choice_id"] == large.pk
        assert data["is_kitchen_visible"] is False

    def test_idempotent_resubmit(self, api_client, store, item, size_group, large):
        payload = create_payload(store, item, size_group, large, idempotency_key="abc-1")

        first = api_client.post(reverse("orders:order-list"), payload, format="json")
        second = api_client.post(reverse("orders:order-list"), payload, format="json")

        assert first.data["id"] == second.data["id"]
        assert Order.objects.count() == 1

    def test_empty_cart(self, api_client, store, item, size_group, large):
        response = api_client.post(
            reverse("orders:order-list"), create_payload(store, item, size_group, large, lines=[]), format="json"
        )

        assert response.status_code == 400
        assert response.data["error"] == "validation_error"

    def test_zero_quantity(self, api_client, store, item, size_group, large):
        payload = create_payload(store, item, size_group, large)
        payload["lines"][0]["quantity"] = 0

        response = api_client.post(reverse("orders:order-list"), payload, format="json")

        assert response.status_code == 400

    def test_unknown_item(self, api_client, store, item, size_group, large):
        payload = create_payload(store, item, size_group, large)
        payload["lines"][0]["item_id"] = 999999

        response = api_client.post(reverse("orders:order-list"), payload, format="json")

        assert response.status_code == 404
        assert response.data["error"] == "not_found"

    def test_malformed_body(self, api_client, store):
        response = api_client.post(reverse("orders:order-list"), {"store_id": store.pk}, format="json")

        assert response.status_code == 400
        assert "lines" in response.data


@pytest.mark.django_db
class TestOrderStatusEndpoints:

    def test_update_status(self, merchant_client, order):
        response = merchant_client.post(
            reverse("orders:order-update-status", args=[order.pk]), {"status": "PREPARING"}, format="json"
        )

        assert response.status_code == 200
        assert response.data["status"] == "PREPARING"
        assert response.data["version"] == 2

    def test_illegal_transition_is_400(self, merchant_client, order):
        response = merchant_client.post(
            reverse("orders:order-update-status", args=[order.pk]), {"status": "COMPLETED"}, format="json"
        )

        assert response.status_code == 400
        assert response.data["current_status"] == "CREATED"

    def test_terminal_order_is_409(self, merchant_client, order, merchant):
        for status in (S.PREPARING, S.READY, S.COMPLETED):
            merchant_client.post(
                reverse("orders:order-update-status", args=[order.pk]), {"status": status}, format="json"
            )

        response = merchant_client.post(reverse("orders:order-cancel", args=[order.pk]), {}, format="json")

        assert response.status_code == 409
        assert response.data["error"] == "conflict"

    def test_other_merchant_is_403(self, other_merchant_client, other_merchant, order):
        response = other_merchant_client.post(
            reverse("orders:order-update-status", args=[order.pk]), {"status": "PREPARING"}, format="json"
        )

        assert response.status_code == 403

    def test_unknown_order_is_404(self, merchant_client):
        response = merchant_client.post(
            reverse("orders:order-update-status", args=[uuid.uuid4()]), {"status": "PREPARING"}, format="json"
        )

        assert response.status_code == 404

    def test_anonymous_cannot_change_status(self, api_client, order):
        response = api_client.post(
            reverse("orders:order-update-status", args=[order.pk]), {"status": "PREPARING"}, format="json"
        )

        assert response.status_code in (401, 403)
        order.refresh_from_db()
        assert order.status == S.CREATED

    def test_cancel_with_reason(self, merchant_client, order):
        response = merchant_client.post(
            reverse("orders:order-cancel", args=[order.pk]), {"reason": "Customer called"}, format="json"
        )

        assert response.status_code == 200
        assert response.data["status"] == "CANCELLED"
        assert response.data["cancel_reason"] == "Customer called"


@pytest.mark.django_db
class TestOrderReadEndpoints:

    def test_retrieve(self, merchant_client, order):
        response = merchant_client.get(reverse("orders:order-detail", args=[order.pk]))

        assert response.status_code == 200
        assert response.data["id"] == str(order.pk)

    def test_retrieve_other_merchants_order(self, other_merchant_client, other_merchant, order):
        response = other_merchant_client.get(reverse("orders:order-detail", args=[order.pk]))

        assert response.status_code == 403

    def test_list_only_shows_own_orders(self, merchant_client, other_merchant_client, other_merchant, order):
        assert [o["id"] for o in merchant_client.get(reverse("orders:order-list")).data] == [str(order.pk)]
        assert other_merchant_client.get(reverse("orders:order-list")).data == []

    def test_list_filter_by_status(self, merchant_client, make_order, merchant):
        kept = make_order()
        cancelled = make_order()
        merchant_client.post(reverse("orders:order-cancel", args=[cancelled.pk]), {}, format="json")

        response = merchant_client.get(reverse("orders:order-list"), {"status": "CREATED"})

        assert [o["id"] for o in response.data] == [str(kept.pk)]

    def test_kitchen_queue(self, merchant_client, store, order):
        merchant_client.post(
            reverse("orders:order-update-status", args=[order.pk]), {"status": "CONFIRMED"}, format="json"
        )

        response = merchant_client.get(reverse("orders:order-kitchen"), {"store": store.pk})

        assert response.status_code == 200
        assert [o["id"] for o in response.data] == [str(order.pk)]
        assert response.data[0]["payment_status"] == "PAID"

    def test_kitchen_queue_requires_store(self, merchant_client):
        response = merchant_client.get(reverse("orders:order-kitchen"))

        assert response.status_code == 400

    def test_kitchen_queue_of_another_store(self, merchant_client, other_store):
        response = merchant_client.get(reverse("orders:order-kitchen"), {"store": other_store.pk})

        assert response.status_code == 403
