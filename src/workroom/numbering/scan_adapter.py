"""Sequential scan allocator — next number is one past the highest in use.

Numbers look like ``DDI-673``. The scan starts from a fixed baseline so that
numbers handed out before the system existed are never reused. Two clerks
placing orders at the same moment can read the same maximum and receive the
same number; at back-office volumes this is accepted rather than prevented.
"""

import os
import re
from collections.abc import Iterable
from datetime import UTC, datetime

from workroom.numbering.port import OrderNumberAllocator

DEFAULT_PREFIX = "DDI"
DEFAULT_BASELINE = 672


class SequentialScanAllocator(OrderNumberAllocator):
    """Scan-and-increment allocator with timestamp fallback."""

    def __init__(self, prefix: str | None = None, baseline: int | None = None):
        self.prefix = prefix or os.environ.get("ORDER_NUMBER_PREFIX", DEFAULT_PREFIX)
        if baseline is None:
            baseline = int(os.environ.get("ORDER_NUMBER_BASELINE", DEFAULT_BASELINE))
        self.baseline = baseline
        self._pattern = re.compile(rf"{re.escape(self.prefix)}-(\d+)")

    def parse(self, order_number: str | None) -> int | None:
        """Integer following the first ``PREFIX-`` in the number, else None."""
        if not order_number:
            return None
        match = self._pattern.search(order_number)
        return int(match.group(1)) if match else None

    def allocate(self, existing_orders: Iterable) -> str:
        highest = self.baseline
        for order in existing_orders:
            number = self.parse(getattr(order, "order_number", None))
            if number is not None and number > highest:
                highest = number
        return f"{self.prefix}-{highest + 1}"

    def fallback(self) -> str:
        millis = int(datetime.now(UTC).timestamp() * 1000)
        return f"{self.prefix}-{millis}"
