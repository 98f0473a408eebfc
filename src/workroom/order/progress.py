"""Order status changes — production advance and sales override.

Two separate commands on purpose: ``AdvanceOrderStatus`` is the production
floor's one-step workflow move, ``SetOrderStatus`` is the sales correction
that may assign any status.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String

from workroom.domain import workroom
from workroom.order.order import Order
from workroom.order.store import OrderStore

logger = structlog.get_logger(__name__)


@workroom.command(part_of="Order")
class AdvanceOrderStatus:
    """Move an order one step along pending → in-progress → ready → completed."""

    order_id = Identifier(required=True)
    advanced_by = String(max_length=255)


@workroom.command(part_of="Order")
class SetOrderStatus:
    """Assign a status directly (sales correction)."""

    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    set_by = String(max_length=255)


@workroom.command_handler(part_of=Order)
class OrderProgressHandler:
    @handle(AdvanceOrderStatus)
    def advance_order_status(self, command):
        store = OrderStore()
        order = store.get(command.order_id)
        new_status = order.advance(command.advanced_by)
        if new_status is None:
            logger.info(
                "Order already completed, nothing to advance",
                order_id=str(order.id),
                order_number=order.order_number,
            )
            return None
        store.replace(order.id, order)
        logger.info(
            "Order status advanced",
            order_id=str(order.id),
            order_number=order.order_number,
            status=new_status.value,
            actor=order.updated_by,
        )
        return new_status.value

    @handle(SetOrderStatus)
    def set_order_status(self, command):
        store = OrderStore()
        order = store.get(command.order_id)
        previous = order.status
        new_status = order.set_status(command.status, command.set_by)
        store.replace(order.id, order)
        logger.warning(
            "Order status overridden",
            order_id=str(order.id),
            order_number=order.order_number,
            previous_status=previous,
            status=new_status.value,
            actor=order.updated_by,
        )
        return new_status.value
