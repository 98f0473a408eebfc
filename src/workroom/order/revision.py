"""Order revision — sales edits to an existing order."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text

from workroom.domain import workroom
from workroom.order.order import Order
from workroom.order.store import OrderStore

_EDITABLE_FIELDS = (
    "customer_name",
    "customer_email",
    "customer_phone",
    "width",
    "height",
    "quantity",
    "fabric_code",
    "image_url",
    "base_size",
    "wooden_color_code",
    "operating_side",
    "notes",
)


@workroom.command(part_of="Order")
class ReviseOrder:
    """Edit an order. Fields left unset keep their current value."""

    order_id = Identifier(required=True)
    customer_name = String(max_length=200)
    customer_email = String(max_length=254)
    customer_phone = String(max_length=50)
    width = Float()
    height = Float()
    quantity = Integer()
    fabric_code = String(max_length=100)
    image_url = String(max_length=1000)
    base_size = String(max_length=10)
    wooden_color_code = String(max_length=100)
    operating_side = String(max_length=10)
    notes = Text()
    revised_by = String(max_length=255)


@workroom.command_handler(part_of=Order)
class ReviseOrderHandler:
    @handle(ReviseOrder)
    def revise_order(self, command):
        store = OrderStore()
        order = store.get(command.order_id)
        edits = {name: getattr(command, name) for name in _EDITABLE_FIELDS}
        order.revise(
            revised_by=command.revised_by,
            **{name: value for name, value in edits.items() if value is not None},
        )
        store.replace(order.id, order)
        return order.order_number
