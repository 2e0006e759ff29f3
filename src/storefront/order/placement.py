"""Order assembly: commit a priced cart as an order and clear the cart.

Everything happens in one unit of work: the order, one line per cart line
with the product's current price, and the removal of exactly the cart lines
that were priced. Either all of it is visible afterwards or none of it is.
"""

from protean import current_domain, handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.fields import Decimal as DecimalField

from storefront.cart.cart import CartLine
from storefront.cart.items import cart_totals
from storefront.domain import logger, storefront
from storefront.order.order import Order
from storefront.pricing.pricing import PricingContext
from storefront.shared.errors import ConflictError, EmptyCartError
from storefront.shared.identity import require_user
from storefront.shared.money import round2


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    shipping_address = Text()
    expected_total = DecimalField()
    payment_reference = String(max_length=100)


def clean_shipping_address(value):
    address = (value or "").strip()
    if not address:
        raise ValidationError({"shipping_address": ["Shipping address is required"]})
    return address


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        """Turn the user's cart into a ``pending`` order and return its id.

        ``expected_total`` guards against the cart changing between payment
        authorization and commit: a different checkout total aborts with
        ``ConflictError``. So does any concurrent change to a priced line.
        """
        user_id = require_user(command.user_id)
        shipping_address = clean_shipping_address(command.shipping_address)

        totals = cart_totals(user_id, PricingContext.CHECKOUT)
        if not totals.items:
            raise EmptyCartError("Cannot place an order from an empty cart")

        breakdown = totals.breakdown
        if command.expected_total is not None and round2(command.expected_total) != breakdown.total:
            raise ConflictError(f"Cart total changed from {round2(command.expected_total)} to {breakdown.total}")

        order = Order.place(
            user_id,
            shipping_address,
            breakdown,
            totals.items,
            payment_reference=command.payment_reference,
        )
        current_domain.repository_for(Order).add(order)

        priced_lines = [item.line for item in totals.items]
        if current_domain.repository_for(CartLine).remove_exact(priced_lines) != len(priced_lines):
            raise ConflictError("Cart was modified while the order was being placed")

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=user_id,
            lines=len(priced_lines),
            total=str(breakdown.total),
        )
        return str(order.id)
