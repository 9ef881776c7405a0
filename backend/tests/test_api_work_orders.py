"""
Tests for the work order endpoints.
"""

from decimal import Decimal
from uuid import uuid4

import pytest


def suit(**overrides):
    body = {
        "description": "Suit",
        "quantity": 1,
        "unit_price": "120.00",
        "currency": "USD",
        "garment_type": "suit",
        "measurements": {"chest": 100, "waist": 84, "hips": 98, "sleeve": 64},
    }
    body.update(overrides)
    return body


@pytest.fixture
def orders_url(api_customer):
    return f"/api/customers/{api_customer}/workorders"


@pytest.fixture
def order_url(client, orders_url):
    response = client.post(orders_url, json={"currency": "USD"})
    assert response.status_code == 201
    return f"{orders_url}/{response.json()['id']}"


class TestWorkOrderCreation:

    def test_create_and_get(self, client, order_url, api_customer):
        response = client.get(order_url)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "Draft"
        assert body["customer_id"] == api_customer
        assert body["items"] == []
        assert body["total"] == 0
        assert body["discount"] == 0

    def test_unknown_customer_is_400(self, client):
        response = client.post(f"/api/customers/{uuid4()}/workorders", json={"currency": "USD"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid customer or appointment"

    def test_bad_currency_is_400(self, client, orders_url):
        response = client.post(orders_url, json={"currency": "DOLLARS"})
        assert response.status_code == 400
        assert "currency" in response.json()["errors"]

    def test_link_own_appointment(self, client, api_customer, orders_url):
        appointment_id = client.post(f"/api/customers/{api_customer}/appointments", json={
            "start_utc": "2025-03-01T10:00:00Z", "end_utc": "2025-03-01T11:00:00Z"
        }).json()["id"]

        response = client.post(orders_url, json={"currency": "USD", "appointment_id": appointment_id})
        assert response.status_code == 201
        summary = client.get(f"/api/workorders/{response.json()['id']}/summary").json()
        assert summary["appointment_id"] == appointment_id

    def test_unknown_appointment_is_400(self, client, orders_url):
        response = client.post(orders_url, json={"currency": "USD", "appointment_id": str(uuid4())})
        assert response.status_code == 400


class TestWorkOrderItems:

    def test_add_item(self, client, order_url):
        assert client.post(f"{order_url}/items", json=suit()).status_code == 204

        body = client.get(order_url).json()
        item = body["items"][0]
        assert item["description"] == "Suit"
        assert item["garment_type"] == "Suit"
        assert item["line_total"] == 120
        assert item["chest"] == 100
        assert body["subtotal"] == 120

    def test_currency_mismatch_is_400(self, client, order_url):
        response = client.post(f"{order_url}/items", json=suit(currency="EUR"))

        assert response.status_code == 400
        assert client.get(order_url).json()["items"] == []

    def test_duplicate_description_is_400(self, client, order_url):
        client.post(f"{order_url}/items", json=suit())
        assert client.post(f"{order_url}/items", json=suit(description="SUIT")).status_code == 400

    def test_zero_quantity_is_400(self, client, order_url):
        response = client.post(f"{order_url}/items", json=suit(quantity=0))
        assert response.status_code == 400
        assert "quantity" in response.json()["errors"]

    def test_update_quantity_keeps_item(self, client, order_url):
        client.post(f"{order_url}/items", json=suit())
        client.post(f"{order_url}/items", json=suit(description="Shirt", unit_price="40", measurements=None))

        assert client.put(f"{order_url}/items/suit", json={"quantity": 3}).status_code == 204

        body = client.get(order_url).json()
        assert [(i["description"], i["quantity"]) for i in body["items"]] == [("Suit", 3), ("Shirt", 1)]
        assert body["items"][0]["chest"] == 100
        assert body["subtotal"] == 400

    def test_missing_item_is_400(self, client, order_url):
        assert client.put(f"{order_url}/items/Coat", json={"quantity": 2}).status_code == 400
        assert client.delete(f"{order_url}/items/Coat").status_code == 400

    def test_oversized_price_or_quantity_is_400(self, client, order_url):
        response = client.post(f"{order_url}/items", json=suit(unit_price="100000000000000000000"))
        assert response.status_code == 400
        assert "unit_price" in response.json()["errors"]

        response = client.post(f"{order_url}/items", json=suit(quantity=1000000000))
        assert response.status_code == 400
        assert "quantity" in response.json()["errors"]

        assert client.get(order_url).status_code == 200

    def test_unrepresentable_line_total_is_400_and_order_stays_readable(self, client, order_url):
        response = client.post(f"{order_url}/items", json=suit(unit_price="900000000000", quantity=2))
        assert response.status_code == 400

        body = client.get(order_url).json()
        assert body["items"] == []
        assert client.get("/api/workorders").status_code == 200

    def test_largest_amount_round_trips_exactly(self, client, order_url):
        response = client.post(f"{order_url}/items", json=suit(unit_price="999999999999.99"))
        assert response.status_code == 204

        response = client.get(order_url)
        assert "999999999999.99" in response.text
        body = response.json()
        assert Decimal(str(body["items"][0]["unit_price"])) == Decimal("999999999999.99")
        assert Decimal(str(body["total"])) == Decimal("999999999999.99")

    def test_oversized_discount_is_400(self, client, order_url):
        response = client.post(f"{order_url}/discount", json={"amount": "1e27", "currency": "USD"})
        assert response.status_code == 400
        assert "amount" in response.json()["errors"]

    def test_remove_item(self, client, order_url):
        client.post(f"{order_url}/items", json=suit())

        assert client.delete(f"{order_url}/items/Suit").status_code == 204
        assert client.get(order_url).json()["items"] == []


class TestWorkOrderDiscount:

    def test_discount_is_capped_at_subtotal(self, client, order_url):
        client.post(f"{order_url}/items", json=suit())

        response = client.post(f"{order_url}/discount", json={"amount": 1000, "currency": "USD"})
        assert response.status_code == 204

        body = client.get(order_url).json()
        assert body["subtotal"] == 120
        assert body["discount"] == 1000
        assert body["total"] == 0

    def test_clear_discount(self, client, order_url):
        client.post(f"{order_url}/items", json=suit())
        client.post(f"{order_url}/discount", json={"amount": 20, "currency": "USD"})
        assert client.get(order_url).json()["total"] == 100

        assert client.delete(f"{order_url}/discount").status_code == 204
        assert client.get(order_url).json()["total"] == 120


class TestWorkOrderLifecycle:

    def test_start_complete_and_freeze(self, client, order_url):
        client.post(f"{order_url}/items", json=suit())

        assert client.post(f"{order_url}/complete").status_code == 400
        assert client.post(f"{order_url}/start").status_code == 204
        assert client.post(f"{order_url}/complete").status_code == 204

        assert client.post(f"{order_url}/items", json=suit(description="Vest")).status_code == 400
        assert client.delete(order_url).status_code == 400
        assert client.get(order_url).json()["status"] == "Completed"

    def test_cancel(self, client, order_url):
        assert client.delete(order_url).status_code == 204
        assert client.delete(order_url).status_code == 204
        assert client.get(order_url).json()["status"] == "Cancelled"

    def test_unknown_order_is_404(self, client, orders_url):
        assert client.get(f"{orders_url}/{uuid4()}").status_code == 404
        assert client.post(f"{orders_url}/{uuid4()}/start").status_code == 404
        assert client.delete(f"{orders_url}/{uuid4()}").status_code == 404

    def test_other_customers_order_is_404(self, client, order_url):
        other = client.post("/api/customers", json={
            "customer_number": "C-3001", "first_name": "Alan", "last_name": "Turing",
            "email": "alan@example.com",
        }).json()["id"]
        order_id = order_url.rsplit("/", 1)[1]

        assert client.get(f"/api/customers/{other}/workorders/{order_id}").status_code == 404
        assert client.post(f"/api/customers/{other}/workorders/{order_id}/items", json=suit()).status_code == 404


class TestWorkOrderLists:

    def test_customer_list_sets_total_count_header(self, client, orders_url, order_url):
        client.post(orders_url, json={"currency": "USD"})

        response = client.get(orders_url, params={"page_size": 1})
        assert response.status_code == 200
        assert response.headers["X-Total-Count"] == "2"
        assert len(response.json()) == 1

    def test_unsupported_sort_is_400(self, client, orders_url):
        assert client.get(orders_url, params={"sort_by": "total"}).status_code == 400

    def test_global_list_filters(self, client, orders_url, order_url):
        client.post(f"{order_url}/items", json=suit(description="Wedding dress", garment_type="dress"))
        other = client.post(orders_url, json={"currency": "USD"}).json()["id"]
        client.post(f"{orders_url}/{other}/start")

        body = client.get("/api/workorders", params={"status": "InProgress"}).json()
        assert [o["id"] for o in body["items"]] == [other]

        body = client.get("/api/workorders", params={"search": "wedding"}).json()
        assert [o["id"] for o in body["items"]] == [order_url.rsplit("/", 1)[1]]

        assert client.get("/api/workorders").json()["total"] == 2

    def test_global_list_rejects_bad_filters(self, client):
        assert client.get("/api/workorders", params={"status": "Shipped"}).status_code == 400
        response = client.get("/api/workorders", params={
            "from_utc": "2025-03-02T00:00:00Z", "to_utc": "2025-03-01T00:00:00Z"
        })
        assert response.status_code == 400

    def test_lookup_by_id_and_summary(self, client, order_url):
        client.post(f"{order_url}/items", json=suit())
        order_id = order_url.rsplit("/", 1)[1]

        detail = client.get(f"/api/workorders/{order_id}").json()
        assert detail["items"][0]["description"] == "Suit"

        summary = client.get(f"/api/workorders/{order_id}/summary").json()
        assert summary["total"] == 120
        assert "items" not in summary

        assert client.get(f"/api/workorders/{uuid4()}").status_code == 404
        assert client.get(f"/api/workorders/{uuid4()}/summary").status_code == 404
