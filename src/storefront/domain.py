"""Storefront domain: catalogue, cart, pricing, orders, wishlist and reviews.

A single domain holds every aggregate so that order placement can write the
order and clear the cart in one unit of work, and so that deleting a product
can remove the cart lines, wishlist entries and reviews that point at it.
"""

from protean.domain import Domain

from storefront.utils.logging import get_logger

storefront = Domain(name="storefront")

logger = get_logger(__name__)
