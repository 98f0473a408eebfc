"""Order feed publisher — pushes the full collection after every committed change.

Runs as a Protean event handler so the snapshot is taken after the unit of
work that wrote the order has committed. A write that fails never raises its
event, so subscribers only ever see confirmed state.
"""

import structlog
from protean.utils.mixins import handle

from workroom.domain import workroom
from workroom.order.events import (
    OrderPlaced,
    OrderRevised,
    OrderStatusAdvanced,
    OrderStatusOverridden,
)
from workroom.order.feed import get_order_feed
from workroom.order.order import Order
from workroom.order.store import OrderStore, OrderStoreError

logger = structlog.get_logger(__name__)


def _publish_snapshot(reason: str, order_number: str) -> None:
    feed = get_order_feed()
    if not len(feed):
        return
    try:
        orders = OrderStore(feed=feed).snapshot()
    except OrderStoreError:
        logger.warning("Order snapshot skipped, collection unavailable", reason=reason, order_number=order_number)
        return
    feed.publish(orders)


@workroom.event_handler(part_of=Order)
class OrderBroadcaster:
    """Fans every order change out to the subscribed consoles."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        _publish_snapshot("placed", event.order_number)

    @handle(OrderRevised)
    def on_order_revised(self, event: OrderRevised) -> None:
        _publish_snapshot("revised", event.order_number)

    @handle(OrderStatusAdvanced)
    def on_status_advanced(self, event: OrderStatusAdvanced) -> None:
        _publish_snapshot("advanced", event.order_number)

    @handle(OrderStatusOverridden)
    def on_status_overridden(self, event: OrderStatusOverridden) -> None:
        _publish_snapshot("overridden", event.order_number)
