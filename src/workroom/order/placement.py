"""Order placement — command and handler.

Placement is the only path that creates orders: the allocator numbers the
order from the current collection, the aggregate derives the cut-list, and
the complete record is written to the store in one replace.
"""

import structlog
from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from workroom.domain import workroom
from workroom.numbering import get_allocator
from workroom.order.order import Order
from workroom.order.store import OrderStore

logger = structlog.get_logger(__name__)


@workroom.command(part_of="Order")
class PlaceOrder:
    """Take a new fabric or wooden blind order."""

    order_type = String(required=True, max_length=20)
    customer_name = String(required=True, max_length=200)
    customer_email = String(max_length=254)
    customer_phone = String(max_length=50)
    width = Float(required=True)
    height = Float(required=True)
    quantity = Integer(default=1)
    fabric_code = String(max_length=100)
    image_url = String(max_length=1000)
    base_size = String(max_length=10)
    wooden_color_code = String(max_length=100)
    operating_side = String(max_length=10)
    notes = Text()
    placed_by = String(max_length=255)


@workroom.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        store = OrderStore()
        allocation = get_allocator().allocate_from(store.snapshot)

        order = Order.place(
            order_number=allocation.order_number,
            order_type=command.order_type,
            customer_name=command.customer_name,
            width=command.width,
            height=command.height,
            quantity=command.quantity,
            customer_email=command.customer_email,
            customer_phone=command.customer_phone,
            fabric_code=command.fabric_code,
            image_url=command.image_url,
            base_size=command.base_size,
            wooden_color_code=command.wooden_color_code,
            operating_side=command.operating_side,
            notes=command.notes,
            placed_by=command.placed_by,
        )
        store.replace(order.id, order)
        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            order_type=order.order_type,
            number_fallback=allocation.degraded,
        )
        return {
            "order_id": str(order.id),
            "order_number": order.order_number,
            "number_fallback": allocation.degraded,
        }
