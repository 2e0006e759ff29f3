"""Shared BDD fixtures and step definitions for the cart and wishlist."""

from decimal import Decimal

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.cart.items import AddToCart, cart_totals, get_cart
from storefront.wishlist.management import AddToWishlist


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the captured domain error."""
    return {"exc": None}


@pytest.fixture()
def products():
    """Products created by the scenario, keyed by name."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price} with {stock:d} in stock'))
def product_in_catalogue(make_product, products, name, price, stock):
    products[name] = make_product(name=name, price=price, stock_quantity=stock)


@given(parsers.cfparse('"{user_id}" has {qty:d} of "{name}" in the cart'))
def product_in_cart(products, user_id, qty, name):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=products[name].id, quantity=qty),
        asynchronous=False,
    )


@given(parsers.cfparse('"{user_id}" has "{name}" on the wishlist'))
def product_on_wishlist(products, user_id, name):
    current_domain.process(AddToWishlist(user_id=user_id, product_id=products[name].id), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request is rejected as "{error_name}"'))
def request_rejected(error, error_name):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_name


@then(parsers.cfparse('the cart of "{user_id}" has {count:d} line'))
def cart_has_n_lines_singular(user_id, count):
    assert len(get_cart(user_id)) == count


@then(parsers.cfparse('the cart of "{user_id}" has {count:d} lines'))
def cart_has_n_lines(user_id, count):
    assert len(get_cart(user_id)) == count


@then(parsers.cfparse('the cart of "{user_id}" holds {qty:d} of "{name}"'))
def cart_holds(products, user_id, qty, name):
    quantities = {item.product_id: item.quantity for item in get_cart(user_id)}
    assert quantities.get(products[name].id) == qty


@then(parsers.cfparse('the cart of "{user_id}" totals {total}'))
def cart_totals_to(user_id, total):
    assert cart_totals(user_id).breakdown.total == Decimal(total)
