"""In-process payment gateway for development and testing.

Approves by default. ``configure()`` switches it to declining. A repeated
idempotency key returns the earlier approval; declines are not remembered,
so the same checkout can be retried after the card is fixed.
"""

from decimal import Decimal
from uuid import uuid4

from storefront.payment.port import PaymentGateway, PaymentResult


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []
        self._approvals: dict[str, PaymentResult] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def authorize_payment(
        self,
        amount: Decimal,
        currency: str,
        idempotency_key: str,
    ) -> PaymentResult:
        self.calls.append({"amount": amount, "currency": currency, "idempotency_key": idempotency_key})

        if idempotency_key in self._approvals:
            return self._approvals[idempotency_key]

        if not self.should_succeed:
            return PaymentResult(success=False, gateway_status="declined", failure_reason=self.failure_reason)

        result = PaymentResult(
            success=True,
            reference=f"fake_auth_{uuid4().hex[:12]}",
            gateway_status="authorized",
        )
        self._approvals[idempotency_key] = result
        return result
