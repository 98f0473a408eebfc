"""Workroom bounded context — made-to-order blind orders and their production workflow.

Handles order placement (sequential order numbers, wooden blind cut-list
derivation), sales-side edits, the production status workflow, and the
push feed that keeps every open console in sync with the order collection.
"""

from protean.domain import Domain

from workroom.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
workroom = Domain(name="workroom")
