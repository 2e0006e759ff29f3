"""Order aggregate: the committed record of a purchase.

Lifecycle:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    PENDING and PROCESSING may also jump forward or be CANCELLED.
    DELIVERED and CANCELLED are terminal.

Only ``status`` changes after creation. Pricing and lines are snapshots taken
when the order was placed and never follow later catalogue price changes.
"""

from enum import Enum

from protean import Q
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text, ValueObject
from protean.fields import Decimal as DecimalField

from storefront.domain import storefront
from storefront.shared.clock import utcnow
from storefront.shared.errors import InvalidStatusTransition
from storefront.shared.money import Money, Quantity


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {
        OrderStatus.PROCESSING,
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.PROCESSING: {
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def parse_status(value):
    """Coerce ``value`` to an ``OrderStatus`` or raise ``InvalidStatusTransition``."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().lower())
    except ValueError:
        raise InvalidStatusTransition(f"Unknown order status {value!r}") from None


def check_transition(current, target):
    current, target = parse_status(current), parse_status(target)
    if target not in _VALID_TRANSITIONS[current]:
        raise InvalidStatusTransition(f"Cannot move an order from {current.value} to {target.value}")
    return target


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class OrderPricing:
    """Totals locked at placement: subtotal, tax, shipping and their sum."""

    subtotal = DecimalField(required=True, min_value=0, precision=12, scale=2)
    tax = DecimalField(required=True, min_value=0, precision=12, scale=2)
    shipping = DecimalField(required=True, min_value=0, precision=12, scale=2)
    total = DecimalField(required=True, min_value=0, precision=12, scale=2)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderLine:
    """A purchased product at its price on the day of the order.

    ``product_id`` is a plain identifier so the line survives the product
    being removed from the catalogue.
    """

    product_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = DecimalField(required=True, min_value=0, precision=10, scale=2)
    position = Integer(default=0)

    @property
    def line_total(self):
        return (Money.of(self.price) * Quantity.of(self.quantity)).rounded().amount


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(
        max_length=20,
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    pricing = ValueObject(OrderPricing)
    lines = HasMany(OrderLine)
    shipping_address = Text(required=True)
    payment_reference = String(max_length=100)
    created_at = DateTime(default=utcnow)
    updated_at = DateTime(default=utcnow)

    @classmethod
    def place(cls, user_id, shipping_address, breakdown, items, payment_reference=None):
        """A ``pending`` order for ``items`` (objects with ``product``, ``quantity``)."""
        return cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            pricing=OrderPricing(
                subtotal=breakdown.subtotal,
                tax=breakdown.tax,
                shipping=breakdown.shipping,
                total=breakdown.total,
            ),
            lines=[
                OrderLine(
                    product_id=item.product_id,
                    product_name=item.product.name,
                    quantity=item.quantity,
                    price=item.product.price,
                    position=position,
                )
                for position, item in enumerate(items)
            ],
            shipping_address=shipping_address,
            payment_reference=payment_reference,
        )

    @property
    def subtotal(self):
        return self.pricing.subtotal

    @property
    def tax_amount(self):
        return self.pricing.tax

    @property
    def shipping_fee(self):
        return self.pricing.shipping

    @property
    def total_amount(self):
        return self.pricing.total

    @property
    def ordered_lines(self):
        return sorted(self.lines, key=lambda line: line.position)

    @property
    def item_count(self):
        return sum(line.quantity for line in self.lines)


@storefront.repository(part_of=Order)
class OrderRepository:
    def change_status_if(self, order_id, previous, target):
        """Write ``target`` only while the stored status is still ``previous``.

        Returns ``True`` when the row was updated.
        """
        dao = self._dao
        updated = dao._update_all(
            Q(id=order_id, status=previous),
            status=target,
            updated_at=utcnow(),
            _version=dao.database_model_cls._version + 1,
        )
        return updated > 0

    def placed_by(self, user_id):
        return self.query.filter(user_id=user_id).count()
