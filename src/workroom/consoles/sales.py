"""Sales console — order intake, edits and status corrections."""

from workroom.consoles.base import ActionOutcome, OrderConsole
from workroom.order.order import DEFAULT_SALES_ACTOR
from workroom.order.placement import PlaceOrder
from workroom.order.progress import SetOrderStatus
from workroom.order.revision import ReviseOrder
from workroom.order.workflow import OrderStatus


class SalesConsole(OrderConsole):
    default_actor = DEFAULT_SALES_ACTOR

    @property
    def pending_orders(self):
        return [order for order in self.orders if order.status == OrderStatus.PENDING.value]

    def summary(self) -> str:
        return f"{len(self.orders)} total orders • {len(self.pending_orders)} pending"

    def create_order(self, **order_fields) -> ActionOutcome:
        result, failed = self._dispatch(
            PlaceOrder,
            "Failed to save order",
            placed_by=self.actor,
            **order_fields,
        )
        if failed:
            return failed

        order_number = result["order_number"]
        warning = None
        if result["number_fallback"]:
            warning = f"Order numbering is unavailable; {order_number} is out of sequence"
        return ActionOutcome(
            ok=True,
            message=f"Order {order_number} created successfully!",
            warning=warning,
            order_id=result["order_id"],
            order_number=order_number,
        )

    def revise_order(self, order_id: str, **order_fields) -> ActionOutcome:
        order_number, failed = self._dispatch(
            ReviseOrder,
            "Failed to save order",
            order_id=order_id,
            revised_by=self.actor,
            **order_fields,
        )
        if failed:
            return failed
        return ActionOutcome(
            ok=True,
            message="Order updated successfully!",
            order_id=str(order_id),
            order_number=order_number,
        )

    def set_status(self, order_id: str, status: str) -> ActionOutcome:
        new_status, failed = self._dispatch(
            SetOrderStatus,
            "Failed to update order status",
            order_id=order_id,
            status=status,
            set_by=self.actor,
        )
        if failed:
            return failed
        order = self.find(order_id)
        return ActionOutcome(
            ok=True,
            message=f"Order status updated to {new_status}",
            order_id=str(order_id),
            order_number=order.order_number if order else None,
        )
