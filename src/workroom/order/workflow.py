"""Production status workflow.

State Machine:
    PENDING → IN_PROGRESS → READY → COMPLETED

The production floor only ever moves an order one step forward. Sales staff
can also assign any status directly to correct mistakes; that override path
lives on the aggregate and never goes through ``next_status``.
"""

from enum import Enum


class OrderStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    READY = "ready"
    COMPLETED = "completed"


STATUS_SEQUENCE = (
    OrderStatus.PENDING,
    OrderStatus.IN_PROGRESS,
    OrderStatus.READY,
    OrderStatus.COMPLETED,
)

_NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.IN_PROGRESS,
    OrderStatus.IN_PROGRESS: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.COMPLETED,
    OrderStatus.COMPLETED: None,  # terminal
}

_LABELS = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.IN_PROGRESS: "In Progress",
    OrderStatus.READY: "Ready",
    OrderStatus.COMPLETED: "Completed",
}


def next_status(current: OrderStatus | str) -> OrderStatus | None:
    """Return the status one step after ``current``, or None once completed."""
    return _NEXT_STATUS[OrderStatus(current)]


def is_terminal(status: OrderStatus | str) -> bool:
    return next_status(status) is None


def status_label(status: OrderStatus | str) -> str:
    """Human-readable label shown on the consoles."""
    return _LABELS[OrderStatus(status)]
