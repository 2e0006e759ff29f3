"""Shared BDD fixtures and step definitions for checkout and orders."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.cart.items import AddToCart
from storefront.checkout.checkout import Checkout
from storefront.order.management import get_order, list_orders


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the captured domain error."""
    return {"exc": None}


@pytest.fixture()
def products():
    return {}


@pytest.fixture()
def placed():
    """Ids of the orders placed by the scenario, in order."""
    return []


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price}'))
def product_in_catalogue(make_product, products, name, price):
    products[name] = make_product(name=name, price=price, stock_quantity=50)


@given(parsers.cfparse('"{user_id}" has {qty:d} of "{name}" in the cart'))
def product_in_cart(products, user_id, qty, name):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=products[name].id, quantity=qty),
        asynchronous=False,
    )


@given(parsers.cfparse('"{user_id}" has checked out'))
def user_checked_out(placed, user_id):
    placed.append(
        current_domain.process(Checkout(user_id=user_id, shipping_address="1 Main St"), asynchronous=False)
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request is rejected as "{error_name}"'))
def request_rejected(error, error_name):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_name


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(placed, status):
    assert get_order(placed[-1]).status == status


@then(parsers.cfparse('"{user_id}" has {count:d} order'))
def user_has_n_orders_singular(user_id, count):
    assert len(list_orders(user_id)) == count


@then(parsers.cfparse('"{user_id}" has {count:d} orders'))
def user_has_n_orders(user_id, count):
    assert len(list_orders(user_id)) == count
