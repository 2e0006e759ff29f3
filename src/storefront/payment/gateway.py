"""Selection of the payment gateway checkout talks to.

The adapter is named by ``PAYMENT_GATEWAY`` in the ``[custom]`` section of
``domain.toml`` and built on first use. Tests replace it with ``install``.
"""

import threading

from storefront.domain import storefront
from storefront.payment.fake_adapter import FakeGateway
from storefront.payment.port import PaymentGateway

ADAPTERS = {
    "fake": FakeGateway,
}


class GatewayRegistry:
    def __init__(self, adapters):
        self._adapters = dict(adapters)
        self._active: PaymentGateway | None = None
        self._lock = threading.Lock()

    def _build(self) -> PaymentGateway:
        name = str(storefront.config["custom"].get("PAYMENT_GATEWAY") or "fake").lower()
        try:
            return self._adapters[name]()
        except KeyError:
            raise ValueError(f"Unknown payment gateway {name!r}; choose from {sorted(self._adapters)}") from None

    def active(self) -> PaymentGateway:
        with self._lock:
            if self._active is None:
                self._active = self._build()
            return self._active

    def install(self, gateway: PaymentGateway) -> PaymentGateway:
        with self._lock:
            self._active = gateway
        return gateway

    def reset(self) -> None:
        with self._lock:
            self._active = None


gateways = GatewayRegistry(ADAPTERS)
