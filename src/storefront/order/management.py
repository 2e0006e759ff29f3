"""Order history and administration."""

from protean import current_domain, handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String

from storefront.domain import logger, storefront
from storefront.order.order import Order, OrderStatus, check_transition
from storefront.shared.errors import ConflictError, NotFound
from storefront.shared.identity import require_user

_NEWEST_FIRST = ["-created_at"]


def _status_filter(status):
    try:
        return OrderStatus(str(status).strip().lower()).value
    except ValueError:
        raise ValidationError({"status": [f"Unknown order status {status!r}"]}) from None


def _orders():
    return current_domain.repository_for(Order).query


def get_order(order_id, user_id=None):
    """Fetch an order with its lines. With ``user_id``, other users' orders are not found."""
    order = current_domain.repository_for(Order).get_or_none(order_id)
    if order is None or (user_id is not None and order.user_id != require_user(user_id)):
        raise NotFound(f"Order {order_id} not found")
    return order


def list_orders(user_id, status=None):
    query = _orders().filter(user_id=require_user(user_id))
    if status:
        query = query.filter(status=_status_filter(status))
    return query.order_by(_NEWEST_FIRST).limit(None).all().items


def list_all_orders(status=None):
    query = _orders()
    if status:
        query = query.filter(status=_status_filter(status))
    return query.order_by(_NEWEST_FIRST).limit(None).all().items


def status_counts(user_id):
    """Number of the user's orders in each status, zero included."""
    user_id = require_user(user_id)
    return {status.value: _orders().filter(user_id=user_id, status=status.value).count() for status in OrderStatus}


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        """Move an order along its lifecycle.

        The write only applies if the status is still the one that was
        checked; losing that race raises ``ConflictError``.
        """
        repo = current_domain.repository_for(Order)
        order = repo.get_or_none(command.order_id)
        if order is None:
            raise NotFound(f"Order {command.order_id} not found")

        previous = order.status
        target = check_transition(previous, command.status)

        if not repo.change_status_if(command.order_id, previous, target.value):
            raise ConflictError("Order status was changed by another request")

        logger.info("order_status_updated", order_id=command.order_id, previous=previous, status=target.value)
        return target.value
