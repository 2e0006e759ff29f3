"""Payment gateway port.

Checkout authorizes the order total through this contract before the order
is committed. No real gateway is integrated; adapters only have to honor
this interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PaymentResult:
    """Result of an authorization attempt."""

    success: bool
    reference: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    @abstractmethod
    def authorize_payment(
        self,
        amount: Decimal,
        currency: str,
        idempotency_key: str,
    ) -> PaymentResult:
        """Authorize ``amount`` in ``currency`` for later capture.

        Repeating ``idempotency_key`` after a successful authorization must
        return that authorization instead of creating a second one.
        """
        ...
