"""Order feed — push notification of the full order collection.

Subscribers are plain callables receiving the whole current collection (a
list of ``Order`` aggregates, newest first) on every committed change. There
are no diffs: each delivery supersedes the previous one.

The feed is a process-wide singleton so that every console and API worker in
the process observes the same stream.
"""

from collections.abc import Callable
from itertools import count

import structlog

logger = structlog.get_logger(__name__)

_feed_instance = None


class Subscription:
    """Handle for one subscriber; close it to stop receiving snapshots."""

    def __init__(self, feed: "OrderFeed", subscription_id: int, callback: Callable):
        self._feed = feed
        self.subscription_id = subscription_id
        self.callback = callback
        self.deliveries = 0

    @property
    def active(self) -> bool:
        return self._feed.is_subscribed(self.subscription_id)

    def deliver(self, orders: list) -> None:
        """Hand one snapshot to the subscriber.

        A failing subscriber is logged and skipped; it never prevents the
        other consoles from receiving the snapshot.
        """
        try:
            self.callback(list(orders))
        except Exception:
            logger.exception("Order feed subscriber failed", subscription_id=self.subscription_id)
            return
        self.deliveries += 1

    def close(self) -> None:
        self._feed.unsubscribe(self.subscription_id)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class OrderFeed:
    """Fan-out of full order snapshots to every subscriber."""

    def __init__(self):
        self._subscriptions: dict[int, Subscription] = {}
        self._ids = count(1)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: Callable[[list], None]) -> Subscription:
        subscription = Subscription(self, next(self._ids), callback)
        self._subscriptions[subscription.subscription_id] = subscription
        return subscription

    def unsubscribe(self, subscription_id: int) -> None:
        self._subscriptions.pop(subscription_id, None)

    def is_subscribed(self, subscription_id: int) -> bool:
        return subscription_id in self._subscriptions

    def publish(self, orders: list) -> int:
        """Push ``orders`` to every subscriber; returns how many were notified."""
        subscriptions = list(self._subscriptions.values())
        for subscription in subscriptions:
            subscription.deliver(orders)
        logger.debug("Order snapshot published", orders=len(orders), subscribers=len(subscriptions))
        return len(subscriptions)


def get_order_feed() -> OrderFeed:
    """Return the process-wide order feed (singleton)."""
    global _feed_instance
    if _feed_instance is None:
        _feed_instance = OrderFeed()
    return _feed_instance


def reset_order_feed() -> None:
    """Drop every subscription (useful for testing)."""
    global _feed_instance
    _feed_instance = None
