"""Storefront error taxonomy, layered on Protean's exceptions.

Validation failures carry a ``messages`` mapping of field name to a list of
messages. State, lookup and conflict errors carry a single message string.
The HTTP status each one maps to is registered in ``storefront.api.errors``.
"""

from protean.exceptions import (
    InvalidStateError,
    ObjectNotFoundError,
    ProteanExceptionWithMessage,
    ValidationError,
)


class Unauthenticated(ProteanExceptionWithMessage):
    """No user identity, or no valid admin key, accompanied the call."""


class InvalidQuantity(ValidationError):
    """A quantity was not a positive whole number."""


class NotFound(ObjectNotFoundError):
    """A referenced line, order, product, category or review does not exist."""


class EmptyCartError(InvalidStateError):
    """Checkout pricing or order placement was attempted on an empty cart."""


class InvalidStatusTransition(InvalidStateError):
    """An order status change violates the forward-only lifecycle."""


class ConflictError(InvalidStateError):
    """A uniqueness rule or a concurrent modification was violated."""


class OutOfStock(ConflictError):
    """The product has no stock left to put in a cart."""


class PaymentDeclined(ProteanExceptionWithMessage):
    """The payment gateway refused to authorize the checkout amount."""
