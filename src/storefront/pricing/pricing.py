"""Pricing engine: turns cart lines and live product prices into totals.

The cart preview shows subtotal and tax only, while checkout adds the flat
shipping fee. Tax is rounded once on the summed subtotal, never per line.
The tax rate, shipping fee and currency come from the ``[custom]`` section of
``domain.toml``.
"""

from decimal import Decimal
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean
from protean.fields import Decimal as DecimalField

from storefront.domain import storefront
from storefront.shared.errors import EmptyCartError, NotFound
from storefront.shared.money import Money, Quantity, round2, to_decimal

DEFAULT_TAX_RATE = Decimal("0.10")
DEFAULT_SHIPPING_FEE = Decimal("10.00")
DEFAULT_CURRENCY = "USD"


class PricingContext(Enum):
    CART_PREVIEW = "cart-preview"
    CHECKOUT = "checkout"


def _setting(name, default):
    return storefront.config["custom"].get(name) or default


def store_currency():
    return str(_setting("CURRENCY", DEFAULT_CURRENCY))


@storefront.value_object
class PricingPolicy:
    tax_rate: DecimalField(required=True, min_value=0)
    flat_shipping_fee: DecimalField(required=True, min_value=0)
    include_shipping: Boolean(default=False)

    @property
    def context(self):
        return PricingContext.CHECKOUT if self.include_shipping else PricingContext.CART_PREVIEW

    @classmethod
    def build(cls, tax_rate=DEFAULT_TAX_RATE, flat_shipping_fee=DEFAULT_SHIPPING_FEE, include_shipping=False):
        tax_rate = to_decimal(tax_rate, field="tax_rate")
        if not tax_rate.is_finite() or tax_rate < 0:
            raise ValidationError({"tax_rate": ["Tax rate must be a non-negative fraction"]})
        return cls(
            tax_rate=tax_rate,
            flat_shipping_fee=Money.of(flat_shipping_fee).amount,
            include_shipping=include_shipping,
        )

    @classmethod
    def for_context(cls, context=PricingContext.CART_PREVIEW):
        """The configured policy for ``context``."""
        return cls.build(
            tax_rate=_setting("TAX_RATE", DEFAULT_TAX_RATE),
            flat_shipping_fee=_setting("FLAT_SHIPPING_FEE", DEFAULT_SHIPPING_FEE),
            include_shipping=PricingContext(context) == PricingContext.CHECKOUT,
        )

    @classmethod
    def cart_preview(cls):
        return cls.for_context(PricingContext.CART_PREVIEW)

    @classmethod
    def checkout(cls):
        return cls.for_context(PricingContext.CHECKOUT)


@storefront.value_object
class PriceBreakdown:
    subtotal: DecimalField(required=True, min_value=0)
    tax: DecimalField(required=True, min_value=0)
    shipping: DecimalField(required=True, min_value=0)
    total: DecimalField(required=True, min_value=0)

    @classmethod
    def zero(cls):
        zero = round2(0)
        return cls(subtotal=zero, tax=zero, shipping=zero, total=zero)

    def as_dict(self):
        return {
            "subtotal": self.subtotal,
            "tax": self.tax,
            "shipping": self.shipping,
            "total": self.total,
        }


def price_cart(lines, products, policy):
    """Price ``lines`` against live ``products`` under ``policy``.

    ``lines`` is any sequence of objects with ``product_id`` and ``quantity``;
    ``products`` maps product id to an object with ``price``. The result is a
    pure function of the inputs.
    """
    lines = list(lines)
    if not lines:
        if policy.include_shipping:
            raise EmptyCartError("Cannot check out an empty cart")
        return PriceBreakdown.zero()

    subtotal = Money.zero()
    for line in lines:
        product = products.get(line.product_id)
        if product is None:
            raise NotFound(f"Product {line.product_id} not found")
        subtotal = subtotal + Money.of(product.price) * Quantity.of(line.quantity)

    subtotal = subtotal.rounded()
    tax = (subtotal * policy.tax_rate).rounded()
    shipping = Money.of(policy.flat_shipping_fee if policy.include_shipping else 0).rounded()
    total = subtotal + tax + shipping

    return PriceBreakdown(
        subtotal=subtotal.amount,
        tax=tax.amount,
        shipping=shipping.amount,
        total=total.amount,
    )
