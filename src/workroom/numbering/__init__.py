"""Order number allocator factory.

Provides get_allocator() / set_allocator() to swap implementations. The
adapter is chosen with the ORDER_NUMBER_ALLOCATOR environment variable and
defaults to the sequential scan allocator.
"""

import os

from workroom.numbering.port import Allocation, OrderNumberAllocator

_current_allocator: OrderNumberAllocator | None = None


def get_allocator() -> OrderNumberAllocator:
    """Return the configured order number allocator (singleton)."""
    global _current_allocator
    if _current_allocator is None:
        adapter = os.environ.get("ORDER_NUMBER_ALLOCATOR", "scan")
        if adapter == "scan":
            from workroom.numbering.scan_adapter import SequentialScanAllocator

            _current_allocator = SequentialScanAllocator()
        else:
            raise ValueError(f"Unknown order number allocator: {adapter}")
    return _current_allocator


def set_allocator(allocator: OrderNumberAllocator) -> None:
    """Override the active allocator (useful for tests)."""
    global _current_allocator
    _current_allocator = allocator


def reset_allocator() -> None:
    """Reset to the configured allocator."""
    global _current_allocator
    _current_allocator = None


__all__ = ["Allocation", "OrderNumberAllocator", "get_allocator", "reset_allocator", "set_allocator"]
