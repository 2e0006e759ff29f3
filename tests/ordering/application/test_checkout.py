"""Tests for checkout: payment authorization followed by order placement."""

from decimal import Decimal

import pytest
from protean import current_domain
from storefront.cart.items import get_cart
from storefront.checkout.checkout import Checkout, checkout_key
from storefront.order.management import get_order
from storefront.order.order import Order
from storefront.shared.errors import EmptyCartError, PaymentDeclined


def _checkout(user_id="alice", shipping_address="1 Main St"):
    return current_domain.process(Checkout(user_id=user_id, shipping_address=shipping_address), asynchronous=False)


class TestCheckout:
    def test_authorizes_checkout_total_then_places_order(self, fake_gateway, make_product, add_to_cart):
        add_to_cart("alice", make_product(price="20.00").id, 2)

        order = get_order(_checkout())

        assert order.total_amount == Decimal("54.00")
        assert [call["amount"] for call in fake_gateway.calls] == [Decimal("54.00")]
        assert fake_gateway.calls[0]["currency"] == "USD"
        assert order.payment_reference.startswith("fake_auth_")
        assert get_cart("alice") == []

    def test_declined_payment_writes_nothing(self, fake_gateway, make_product, add_to_cart):
        add_to_cart("alice", make_product().id, 1)
        fake_gateway.configure(should_succeed=False, failure_reason="Insufficient funds")

        with pytest.raises(PaymentDeclined) as exc_info:
            _checkout()

        assert exc_info.value.messages == {"payment": ["Insufficient funds"]}
        assert current_domain.repository_for(Order).placed_by("alice") == 0
        assert len(get_cart("alice")) == 1

    def test_retry_after_decline_reuses_the_key(self, fake_gateway, make_product, add_to_cart):
        add_to_cart("alice", make_product().id, 1)
        fake_gateway.configure(should_succeed=False)
        with pytest.raises(PaymentDeclined):
            _checkout()

        fake_gateway.configure(should_succeed=True)
        _checkout()

        keys = [call["idempotency_key"] for call in fake_gateway.calls]
        assert len(keys) == 2
        assert keys[0] == keys[1]

    def test_each_checkout_gets_its_own_payment_reference(self, fake_gateway, make_product, add_to_cart):
        product = make_product(price="20.00")

        add_to_cart("alice", product.id, 1)
        first = get_order(_checkout())
        add_to_cart("alice", product.id, 1)
        second = get_order(_checkout())

        assert first.id != second.id
        assert first.payment_reference != second.payment_reference
        keys = [call["idempotency_key"] for call in fake_gateway.calls]
        assert len(set(keys)) == 2

    def test_empty_cart_never_reaches_the_gateway(self, fake_gateway):
        with pytest.raises(EmptyCartError):
            _checkout()
        assert fake_gateway.calls == []

    def test_default_gateway_approves(self, make_product, add_to_cart):
        add_to_cart("alice", make_product().id, 1)
        assert get_order(_checkout()).payment_reference


class TestCheckoutKey:
    def _items(self, *specs):
        from types import SimpleNamespace

        return [SimpleNamespace(product_id=p, quantity=q, unit_price=Decimal(u)) for p, q, u in specs]

    def test_stable_for_same_attempt(self):
        items = self._items(("p1", 2, "20.00"))
        assert checkout_key("alice", 0, items) == checkout_key("alice", 0, items)

    def test_changes_after_an_order_is_placed(self):
        items = self._items(("p1", 1, "20.00"))
        assert checkout_key("alice", 0, items) != checkout_key("alice", 1, items)

    def test_changes_with_cart_contents(self):
        assert checkout_key("alice", 0, self._items(("p1", 1, "20.00"))) != checkout_key(
            "alice", 0, self._items(("p1", 2, "20.00"))
        )

    def test_scoped_to_user(self):
        items = self._items(("p1", 1, "20.00"))
        assert checkout_key("alice", 0, items) != checkout_key("bob", 0, items)
