"""HTTP tests for checkout, order history and order administration."""

import pytest

ALICE = {"X-User-Id": "alice"}


@pytest.fixture()
def stocked_cart(make_product, add_to_cart):
    product = make_product(name="Classic Tee", price="20.00")
    add_to_cart("alice", product.id, 2)
    return product


class TestCheckoutApi:
    def test_summary_includes_shipping(self, client, stocked_cart):
        summary = client.get("/checkout", headers=ALICE).json()

        assert summary["subtotal"] == "40.00"
        assert summary["shipping"] == "10.00"
        assert summary["total"] == "54.00"

    def test_place_order(self, client, stocked_cart):
        response = client.post("/checkout", json={"shipping_address": "1 Main St"}, headers=ALICE)

        assert response.status_code == 201
        order = response.json()
        assert order["status"] == "pending"
        assert order["total_amount"] == "54.00"
        assert order["lines"][0]["product_name"] == "Classic Tee"
        assert order["lines"][0]["line_total"] == "40.00"
        assert client.get("/cart", headers=ALICE).json()["lines"] == []

    def test_declined_payment_is_402(self, client, stocked_cart, fake_gateway):
        fake_gateway.configure(should_succeed=False, failure_reason="Card declined")

        response = client.post("/checkout", json={"shipping_address": "1 Main St"}, headers=ALICE)

        assert response.status_code == 402
        assert response.json()["error"] == {"payment": ["Card declined"]}
        assert client.get("/orders", headers=ALICE).json() == []

    def test_empty_cart_is_409(self, client):
        response = client.post("/checkout", json={"shipping_address": "1 Main St"}, headers=ALICE)
        assert response.status_code == 409

    def test_blank_address_is_400(self, client, stocked_cart):
        response = client.post("/checkout", json={"shipping_address": "  "}, headers=ALICE)
        assert response.status_code == 400


class TestOrderHistoryApi:
    def test_history_and_detail(self, client, stocked_cart):
        order_id = client.post("/checkout", json={"shipping_address": "1 Main St"}, headers=ALICE).json()["id"]

        history = client.get("/orders", headers=ALICE).json()
        assert [order["id"] for order in history] == [order_id]

        detail = client.get(f"/orders/{order_id}", headers=ALICE)
        assert detail.status_code == 200

        counts = client.get("/orders/status-counts", headers=ALICE).json()
        assert counts["pending"] == 1

    def test_other_users_order_is_404(self, client, stocked_cart):
        order_id = client.post("/checkout", json={"shipping_address": "1 Main St"}, headers=ALICE).json()["id"]

        response = client.get(f"/orders/{order_id}", headers={"X-User-Id": "bob"})

        assert response.status_code == 404

    def test_unknown_status_filter_is_400(self, client):
        response = client.get("/orders", params={"status": "lost"}, headers=ALICE)
        assert response.status_code == 400


class TestOrderAdminApi:
    def test_status_update_and_listing(self, client, stocked_cart):
        order_id = client.post("/checkout", json={"shipping_address": "1 Main St"}, headers=ALICE).json()["id"]

        updated = client.patch(f"/admin/orders/{order_id}/status", json={"status": "shipped"})
        assert updated.status_code == 200
        assert updated.json()["status"] == "shipped"

        listed = client.get("/admin/orders", params={"status": "shipped"}).json()
        assert [order["id"] for order in listed] == [order_id]

    def test_invalid_transition_is_409(self, client, stocked_cart):
        order_id = client.post("/checkout", json={"shipping_address": "1 Main St"}, headers=ALICE).json()["id"]
        client.patch(f"/admin/orders/{order_id}/status", json={"status": "delivered"})

        response = client.patch(f"/admin/orders/{order_id}/status", json={"status": "pending"})

        assert response.status_code == 409

    def test_unknown_order_is_404(self, client):
        response = client.patch("/admin/orders/missing/status", json={"status": "shipped"})
        assert response.status_code == 404
