"""Money and Quantity value objects.

Prices are held as ``Decimal`` and rounded half-up to two places only when
explicitly asked, so a sum can be rounded once instead of per line.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean.exceptions import ValidationError
from protean.fields import Decimal as DecimalField
from protean.fields import Integer

from storefront.domain import storefront
from storefront.shared.errors import InvalidQuantity

CENT = Decimal("0.01")


def to_decimal(value, field="amount"):
    """Convert ints, strings, floats and Decimals to ``Decimal`` without binary drift."""
    if isinstance(value, bool):
        raise ValidationError({field: [f"{field} must be a number"]})
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError({field: [f"{field} must be a number"]}) from None


def round2(value):
    """Round half-up to two decimal places."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@storefront.value_object
class Money:
    """A non-negative, currency-agnostic monetary amount."""

    amount: DecimalField(required=True, min_value=0)

    @classmethod
    def of(cls, value):
        if isinstance(value, Money):
            return value
        amount = to_decimal(value)
        if not amount.is_finite():
            raise ValidationError({"amount": ["Amount must be a finite number"]})
        if amount < 0:
            raise ValidationError({"amount": ["Amount cannot be negative"]})
        return cls(amount=amount)

    @classmethod
    def zero(cls):
        return cls(amount=Decimal("0"))

    def __add__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        return Money(amount=self.amount + other.amount)

    def __mul__(self, factor):
        if isinstance(factor, Quantity):
            factor = factor.value
        if isinstance(factor, Money):
            return NotImplemented
        return Money.of(self.amount * to_decimal(factor, field="factor"))

    __rmul__ = __mul__

    def rounded(self):
        return Money(amount=round2(self.amount))

    def __str__(self):
        return str(round2(self.amount))


@storefront.value_object
class Quantity:
    """A positive whole count of units."""

    value: Integer(required=True, min_value=1)

    @classmethod
    def of(cls, value):
        """Build a quantity, raising ``InvalidQuantity`` for anything but an int of at least one."""
        if isinstance(value, Quantity):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidQuantity({"quantity": ["Quantity must be a whole number"]})
        if value < 1:
            raise InvalidQuantity({"quantity": ["Quantity must be at least 1"]})
        return cls(value=value)

    def __int__(self):
        return self.value
