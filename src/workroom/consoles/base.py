"""Shared plumbing for the order consoles.

A console is one staff member's live view of the order collection: it
subscribes to the store, keeps the latest snapshot, and turns actions into
commands. Its snapshot only ever changes when the feed delivers a new one,
so a failed write leaves the console showing exactly what is stored.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog
from protean.exceptions import ObjectNotFoundError, TransactionError, ValidationError
from protean.utils.globals import current_domain

from workroom.order.order import Order
from workroom.order.store import OrderStore, OrderStoreError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ActionOutcome:
    """What a console reports back to the user after an action."""

    ok: bool
    message: str
    warning: str | None = None
    order_id: str | None = None
    order_number: str | None = None
    errors: dict = field(default_factory=dict)


class OrderConsole:
    """Live view of the order collection plus command dispatch."""

    default_actor = "admin"

    def __init__(self, actor: str | None = None, store: OrderStore | None = None):
        self.actor = actor or self.default_actor
        self.store = store or OrderStore()
        self.orders: list[Order] = []
        self.refreshed_at: datetime | None = None
        self._subscription = None

    def open(self):
        """Start receiving snapshots; the current collection arrives immediately."""
        if self._subscription is None:
            self._subscription = self.store.subscribe(self._receive)
        return self

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc_info):
        self.close()

    @property
    def is_open(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def refresh(self) -> None:
        """Pull the current collection once, without subscribing."""
        self._receive(self.store.snapshot())

    def _receive(self, orders: list[Order]) -> None:
        self.orders = orders
        self.refreshed_at = datetime.now(UTC)

    def find(self, order_id: str) -> Order | None:
        return next((order for order in self.orders if str(order.id) == str(order_id)), None)

    def find_by_number(self, order_number: str) -> Order | None:
        return next((order for order in self.orders if order.order_number == order_number), None)

    def _dispatch(self, command_cls, failure_message: str, **command_fields):
        """Build and process a command; returns (result, None) or (None, failed outcome).

        Writes staged by a handler are only flushed when its unit of work
        commits, so a provider failure can also arrive as ``TransactionError``.
        """
        try:
            command = command_cls(**command_fields)
            return current_domain.process(command, asynchronous=False), None
        except (OrderStoreError, TransactionError) as exc:
            logger.error(failure_message, actor=self.actor, error=str(exc))
            return None, ActionOutcome(ok=False, message=failure_message, warning="Please try again")
        except ObjectNotFoundError:
            return None, ActionOutcome(ok=False, message="Order not found")
        except ValidationError as exc:
            return None, ActionOutcome(ok=False, message=failure_message, errors=dict(exc.messages))
