"""Order record store — the authoritative order collection.

Reads hand back the whole collection (newest first) or one record; writes
replace a whole record, never individual fields. Every committed write is
followed by a push of the full collection to the order feed (see
``workroom.order.broadcast``), so the store itself only deals with reads,
writes and subscriptions.

Failures of the underlying provider are reported as ``OrderStoreError``. The
store does not retry; the caller decides whether to offer a retry.
"""

from collections.abc import Callable

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from workroom.domain import workroom
from workroom.order.feed import Subscription, get_order_feed
from workroom.order.order import Order

logger = structlog.get_logger(__name__)

_PAGE_SIZE = 100


class OrderStoreError(Exception):
    """The order collection could not be read or written."""


@workroom.repository(part_of=Order)
class OrderRepository:
    """Repository for the Order aggregate with a full-collection read."""

    def all_orders(self) -> list[Order]:
        """Every order in the collection, oldest first."""
        orders = []
        offset = 0
        while True:
            page = self._dao.query.order_by("created_at").offset(offset).limit(_PAGE_SIZE).all()
            orders.extend(page.items)
            if len(page.items) < _PAGE_SIZE:
                return orders
            offset += _PAGE_SIZE


def newest_first(orders) -> list[Order]:
    return sorted(orders, key=lambda order: order.created_at, reverse=True)


class OrderStore:
    """Read, replace and subscribe to order records."""

    def __init__(self, repository=None, feed=None):
        self._repository = repository
        self._feed = feed

    @property
    def repository(self):
        return self._repository or current_domain.repository_for(Order)

    @property
    def feed(self):
        return self._feed or get_order_feed()

    def snapshot(self) -> list[Order]:
        """The entire current collection, newest first."""
        try:
            orders = self.repository.all_orders()
        except Exception as exc:
            logger.error("Order collection could not be read", error=str(exc))
            raise OrderStoreError("Order collection is unavailable") from exc
        return newest_first(orders)

    def get(self, order_id: str) -> Order:
        """Load one order. Raises ObjectNotFoundError when there is none."""
        try:
            return self.repository.get(order_id)
        except ObjectNotFoundError:
            raise
        except Exception as exc:
            logger.error("Order could not be read", order_id=order_id, error=str(exc))
            raise OrderStoreError(f"Order {order_id} could not be read") from exc

    def replace(self, order_id: str, order: Order) -> None:
        """Write ``order`` as the complete record stored under ``order_id``."""
        if str(order.id) != str(order_id):
            raise ValidationError({"id": [f"Record {order.id} cannot replace order {order_id}"]})
        try:
            self.repository.add(order)
        except ValidationError:
            raise
        except Exception as exc:
            logger.error(
                "Order write failed",
                order_id=str(order_id),
                order_number=order.order_number,
                error=str(exc),
            )
            raise OrderStoreError(f"Order {order.order_number} could not be saved") from exc

    def subscribe(self, callback: Callable[[list[Order]], None]) -> Subscription:
        """Deliver the current collection now, then again after every committed change."""
        subscription = self.feed.subscribe(callback)
        try:
            subscription.deliver(self.snapshot())
        except OrderStoreError:
            subscription.close()
            raise
        return subscription
