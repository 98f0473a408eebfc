"""Production console — the workshop floor's queue.

Shows unfinished orders and completed ones separately and only ever moves an
order one step forward.
"""

from workroom.consoles.base import ActionOutcome, OrderConsole
from workroom.order.order import DEFAULT_PRODUCTION_ACTOR
from workroom.order.progress import AdvanceOrderStatus
from workroom.order.workflow import STATUS_SEQUENCE, OrderStatus, is_terminal, next_status, status_label


class ProductionConsole(OrderConsole):
    default_actor = DEFAULT_PRODUCTION_ACTOR

    @property
    def active_orders(self):
        return [order for order in self.orders if order.status != OrderStatus.COMPLETED.value]

    @property
    def completed_orders(self):
        return [order for order in self.orders if order.status == OrderStatus.COMPLETED.value]

    def status_counts(self) -> dict[str, int]:
        counts = {status.value: 0 for status in STATUS_SEQUENCE}
        for order in self.orders:
            counts[order.status] = counts.get(order.status, 0) + 1
        return counts

    def next_action(self, order_id: str) -> str | None:
        """Label of the button the floor would press, e.g. "Mark as Ready"."""
        order = self.find(order_id)
        if order is None or is_terminal(order.status):
            return None
        return f"Mark as {status_label(next_status(order.status))}"

    def advance(self, order_id: str) -> ActionOutcome:
        order = self.find(order_id)
        order_number = order.order_number if order else str(order_id)

        new_status, failed = self._dispatch(
            AdvanceOrderStatus,
            "Failed to update order status",
            order_id=order_id,
            advanced_by=self.actor,
        )
        if failed:
            return failed
        if new_status is None:
            return ActionOutcome(
                ok=True,
                message=f"Order {order_number} is already completed",
                order_id=str(order_id),
                order_number=order_number,
            )
        return ActionOutcome(
            ok=True,
            message=f"Order {order_number} updated to {new_status}",
            order_id=str(order_id),
            order_number=order_number,
        )
