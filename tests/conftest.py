import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    from storefront.payment.gateway import gateways

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()

    gateways.reset()


@pytest.fixture()
def fake_gateway():
    from storefront.payment.fake_adapter import FakeGateway
    from storefront.payment.gateway import gateways

    return gateways.install(FakeGateway())


@pytest.fixture()
def make_product():
    """Factory for catalogue products with sensible defaults; returns the stored product."""
    from protean import current_domain

    from storefront.product.management import CreateProduct
    from storefront.product.product import Product

    def _make(name="Test Product", price="10.00", stock_quantity=10, **kwargs):
        product_id = current_domain.process(
            CreateProduct(name=name, price=price, stock_quantity=stock_quantity, **kwargs),
            asynchronous=False,
        )
        return current_domain.repository_for(Product).get(product_id)

    return _make


@pytest.fixture()
def make_category():
    from protean import current_domain

    from storefront.category.category import Category
    from storefront.category.management import CreateCategory

    def _make(name="Apparel", slug="apparel", **kwargs):
        category_id = current_domain.process(CreateCategory(name=name, slug=slug, **kwargs), asynchronous=False)
        return current_domain.repository_for(Category).get(category_id)

    return _make


@pytest.fixture()
def add_to_cart():
    from protean import current_domain

    from storefront.cart.items import AddToCart

    def _add(user_id, product_id, quantity=1):
        return current_domain.process(
            AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def client():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from protean.integrations.fastapi import DomainContextMiddleware

    from storefront.api import ROUTERS, register_error_handlers
    from storefront.domain import storefront

    app = FastAPI()
    app.add_middleware(DomainContextMiddleware, route_domain_map={"/": storefront})
    register_error_handlers(app)
    for router in ROUTERS:
        app.include_router(router)
    return TestClient(app)
