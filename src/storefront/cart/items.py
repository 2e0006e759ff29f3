"""Cart item management: add, update, remove and read a user's cart lines."""

from dataclasses import dataclass

from protean import current_domain, handle
from protean.fields import Identifier, Integer

from storefront.cart.cart import CartLine
from storefront.domain import logger, storefront
from storefront.pricing.pricing import PriceBreakdown, PricingContext, PricingPolicy, price_cart
from storefront.product.product import Product
from storefront.product.queries import products_by_id
from storefront.shared.errors import NotFound
from storefront.shared.identity import require_user
from storefront.shared.money import Money, Quantity


@storefront.command(part_of="CartLine")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)


@storefront.command(part_of="CartLine")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    line_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="CartLine")
class RemoveFromCart:
    user_id = Identifier(required=True)
    line_id = Identifier(required=True)


@storefront.command(part_of="CartLine")
class ClearCart:
    user_id = Identifier(required=True)


def load_stocked_product(product_id):
    product = current_domain.repository_for(Product).get_or_none(product_id)
    if product is None:
        raise NotFound(f"Product {product_id} not found")
    product.ensure_in_stock()
    return product


@storefront.command_handler(part_of=CartLine)
class CartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        """Add units of a product, merging into an existing line.

        Two concurrent adds of the same product end with the sum of both
        quantities on a single line. Returns the line id.
        """
        user_id = require_user(command.user_id)
        quantity = Quantity.of(command.quantity)
        load_stocked_product(command.product_id)

        line_id, stored = current_domain.repository_for(CartLine).add_or_increment(
            user_id, command.product_id, int(quantity)
        )

        logger.info(
            "cart_item_added",
            user_id=user_id,
            product_id=command.product_id,
            added=int(quantity),
            quantity=stored,
        )
        return str(line_id)

    @handle(UpdateCartQuantity)
    def update_quantity(self, command):
        user_id = require_user(command.user_id)
        quantity = Quantity.of(command.quantity)

        repo = current_domain.repository_for(CartLine)
        line = repo.line_of(user_id, command.line_id)
        if line is None:
            raise NotFound(f"Cart line {command.line_id} not found")

        line.change_quantity(quantity)
        repo.add(line)

        logger.info("cart_quantity_updated", user_id=user_id, line_id=command.line_id, quantity=int(quantity))
        return str(line.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        user_id = require_user(command.user_id)
        removed = current_domain.repository_for(CartLine).remove(user_id, command.line_id)
        if removed:
            logger.info("cart_item_removed", user_id=user_id, line_id=command.line_id)
        return removed

    @handle(ClearCart)
    def clear_cart(self, command):
        user_id = require_user(command.user_id)
        removed = current_domain.repository_for(CartLine).remove_all(user_id)
        logger.info("cart_cleared", user_id=user_id, lines=removed)
        return removed


@dataclass(frozen=True)
class CartItem:
    """A cart line joined with its live product."""

    line: CartLine
    product: Product

    @property
    def id(self):
        return self.line.id

    @property
    def product_id(self):
        return self.line.product_id

    @property
    def quantity(self):
        return self.line.quantity

    @property
    def unit_price(self):
        return self.product.price

    @property
    def line_total(self):
        return (Money.of(self.product.price) * Quantity.of(self.line.quantity)).rounded().amount


@dataclass(frozen=True)
class CartTotals:
    items: list
    breakdown: PriceBreakdown

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)


def get_cart(user_id):
    """The user's lines in insertion order, each with its live product.

    Lines whose product has since disappeared are left out.
    """
    user_id = require_user(user_id)
    lines = current_domain.repository_for(CartLine).lines_for(user_id)
    products = products_by_id(line.product_id for line in lines)
    return [CartItem(line=line, product=products[line.product_id]) for line in lines if line.product_id in products]


def cart_totals(user_id, context=PricingContext.CART_PREVIEW):
    """The cart's items plus their price breakdown under ``context``."""
    policy = PricingPolicy.for_context(context)
    items = get_cart(user_id)
    breakdown = price_cart(items, {item.product_id: item.product for item in items}, policy)
    return CartTotals(items=items, breakdown=breakdown)


def cart_item(user_id, line_id):
    """One line of the user's cart with its live product."""
    for item in get_cart(user_id):
        if item.id == line_id:
            return item
    raise NotFound(f"Cart line {line_id} not found")
