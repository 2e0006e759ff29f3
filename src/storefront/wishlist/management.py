"""Wishlist management: add, remove, and move entries into the cart."""

from dataclasses import dataclass

from protean import current_domain, handle
from protean.fields import Identifier, Integer

from storefront.cart.cart import CartLine
from storefront.cart.items import load_stocked_product
from storefront.domain import logger, storefront
from storefront.product.product import Product
from storefront.product.queries import products_by_id
from storefront.shared.errors import NotFound
from storefront.shared.identity import require_user
from storefront.shared.money import Quantity
from storefront.wishlist.wishlist import WishlistEntry


@storefront.command(part_of="WishlistEntry")
class AddToWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="WishlistEntry")
class RemoveFromWishlist:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="WishlistEntry")
class MoveToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)


@storefront.command_handler(part_of=WishlistEntry)
class WishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        """Idempotent: adding a product twice leaves a single entry."""
        user_id = require_user(command.user_id)
        if current_domain.repository_for(Product).get_or_none(command.product_id) is None:
            raise NotFound(f"Product {command.product_id} not found")

        added = current_domain.repository_for(WishlistEntry).add_unless_present(user_id, command.product_id)
        if added:
            logger.info("wishlist_item_added", user_id=user_id, product_id=command.product_id)
        return added

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        user_id = require_user(command.user_id)
        removed = current_domain.repository_for(WishlistEntry).remove(user_id, command.product_id)
        if removed:
            logger.info("wishlist_item_removed", user_id=user_id, product_id=command.product_id)
        return removed

    @handle(MoveToCart)
    def move_to_cart(self, command):
        """Add the product to the cart and drop it from the wishlist, together.

        If the cart add fails the wishlist entry stays where it was. Returns
        the cart line id.
        """
        user_id = require_user(command.user_id)
        quantity = Quantity.of(command.quantity)

        wishlist = current_domain.repository_for(WishlistEntry)
        if not wishlist.contains(user_id, command.product_id):
            raise NotFound(f"Product {command.product_id} is not on the wishlist")
        load_stocked_product(command.product_id)

        line_id, stored = current_domain.repository_for(CartLine).add_or_increment(
            user_id, command.product_id, int(quantity)
        )
        wishlist.remove(user_id, command.product_id)

        logger.info(
            "wishlist_item_moved_to_cart",
            user_id=user_id,
            product_id=command.product_id,
            quantity=stored,
        )
        return str(line_id)


@dataclass(frozen=True)
class WishlistItem:
    entry: WishlistEntry
    product: Product

    @property
    def product_id(self):
        return self.entry.product_id

    @property
    def added_at(self):
        return self.entry.created_at


def get_wishlist(user_id):
    """The user's entries, newest first, each with its live product."""
    user_id = require_user(user_id)
    entries = current_domain.repository_for(WishlistEntry).entries_for(user_id)
    products = products_by_id(entry.product_id for entry in entries)
    return [
        WishlistItem(entry=entry, product=products[entry.product_id])
        for entry in entries
        if entry.product_id in products
    ]


def is_in_wishlist(user_id, product_id):
    user_id = require_user(user_id)
    return current_domain.repository_for(WishlistEntry).contains(user_id, product_id)
