"""Checkout: authorize the checkout total, then place the order.

Flow:
    1. Price the cart in checkout context (shipping included).
    2. Ask the payment gateway to authorize that total.
    3a. Declined → PaymentDeclined; nothing is written.
    3b. Authorized → place the order, guarded by the authorized total so a
        cart changed in the meantime aborts with ConflictError.
"""

import hashlib

from protean import current_domain, handle
from protean.fields import Identifier, Text

from storefront.cart.items import cart_totals
from storefront.domain import logger, storefront
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder, clean_shipping_address
from storefront.payment.gateway import gateways
from storefront.pricing.pricing import PricingContext, store_currency
from storefront.shared.errors import PaymentDeclined
from storefront.shared.identity import require_user


def checkout_key(user_id, orders_placed, items):
    """Idempotency key for one checkout attempt.

    Retrying the same cart before an order lands reuses the key. Once an
    order is placed the count moves on, so the next checkout gets a new key
    even if its cart looks identical.
    """
    digest = hashlib.sha256(f"{user_id}#{orders_placed}".encode())
    for item in items:
        digest.update(f"|{item.product_id}:{item.quantity}:{item.unit_price}".encode())
    return f"checkout-{digest.hexdigest()[:32]}"


@storefront.command(part_of="Order")
class Checkout:
    user_id = Identifier(required=True)
    shipping_address = Text()


@storefront.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        """Authorize payment for the cart and place the order; returns the order id."""
        user_id = require_user(command.user_id)
        shipping_address = clean_shipping_address(command.shipping_address)

        totals = cart_totals(user_id, PricingContext.CHECKOUT)
        total = totals.breakdown.total
        orders_placed = current_domain.repository_for(Order).placed_by(user_id)
        idempotency_key = checkout_key(user_id, orders_placed, totals.items)

        result = gateways.active().authorize_payment(total, store_currency(), idempotency_key)
        if not result.success:
            logger.warning(
                "payment_declined",
                user_id=user_id,
                amount=str(total),
                reason=result.failure_reason,
            )
            raise PaymentDeclined({"payment": [result.failure_reason or "Payment was declined"]})

        logger.info("payment_authorized", user_id=user_id, amount=str(total), reference=result.reference)
        return current_domain.process(
            PlaceOrder(
                user_id=user_id,
                shipping_address=shipping_address,
                expected_total=total,
                payment_reference=result.reference,
            ),
            asynchronous=False,
        )
