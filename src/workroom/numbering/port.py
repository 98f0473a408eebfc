"""Order number allocator port (abstract interface).

Allocators turn the current order collection into the next human-facing
order number. The default adapter scans the collection; a stronger backend
(a transactional counter, say) can be dropped in through
``workroom.numbering.set_allocator`` without touching the order code.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import structlog

from workroom.order.store import OrderStoreError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Allocation:
    """Result of allocating an order number."""

    order_number: str
    degraded: bool = False
    reason: str | None = None


class OrderNumberAllocator(ABC):
    """Abstract order number allocator."""

    @abstractmethod
    def allocate(self, existing_orders: Iterable) -> str:
        """Return the next order number given every existing order."""
        ...

    @abstractmethod
    def fallback(self) -> str:
        """Return a number that does not depend on reading the collection."""
        ...

    def allocate_from(self, load_orders: Callable[[], Iterable]) -> Allocation:
        """Read the collection with ``load_orders`` and allocate from it.

        When the collection cannot be read the fallback number is used, so
        placing an order always makes progress; the allocation is then
        flagged as degraded and the caller should warn the user that the
        number is out of sequence.
        """
        try:
            existing_orders = load_orders()
        except OrderStoreError as exc:
            order_number = self.fallback()
            logger.warning(
                "Order number scan failed, using fallback numbering",
                order_number=order_number,
                error=str(exc),
            )
            return Allocation(order_number=order_number, degraded=True, reason=str(exc))
        return Allocation(order_number=self.allocate(existing_orders))
