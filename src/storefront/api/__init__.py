"""Storefront HTTP API package.

The routers are re-exported lazily: ``Domain.init()`` loads each module in
this directory on its own, and an eager import here would re-enter a
half-loaded sibling module.
"""

from importlib import import_module

_EXPORTS = {
    "admin_router": "storefront.api.admin",
    "cart_router": "storefront.api.cart",
    "wishlist_router": "storefront.api.cart",
    "category_router": "storefront.api.catalogue",
    "product_router": "storefront.api.catalogue",
    "register_error_handlers": "storefront.api.errors",
    "checkout_router": "storefront.api.orders",
    "order_router": "storefront.api.orders",
    "product_review_router": "storefront.api.reviews",
    "review_router": "storefront.api.reviews",
}

_ROUTER_ORDER = (
    "product_router",
    "product_review_router",
    "category_router",
    "cart_router",
    "wishlist_router",
    "checkout_router",
    "order_router",
    "review_router",
    "admin_router",
)


def __getattr__(name):
    if name == "ROUTERS":
        value = tuple(__getattr__(router) for router in _ROUTER_ORDER)
    elif name in _EXPORTS:
        value = getattr(import_module(_EXPORTS[name]), name)
    else:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    globals()[name] = value
    return value


__all__ = [
    "ROUTERS",
    "admin_router",
    "cart_router",
    "category_router",
    "checkout_router",
    "order_router",
    "product_review_router",
    "product_router",
    "register_error_handlers",
    "review_router",
    "wishlist_router",
]
