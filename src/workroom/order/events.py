"""Order domain events — immutable facts about order records.

Every committed change to an order raises exactly one of these. They drive
the order feed and form the audit trail for status overrides.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from workroom.domain import workroom


@workroom.event(part_of="Order")
class OrderPlaced:
    """A new order was taken by sales and numbered."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    order_type = String(required=True)
    customer_name = String(required=True)
    width = Float(required=True)
    height = Float(required=True)
    quantity = Integer(required=True)
    number_of_slats = Integer()
    placed_by = String(required=True)
    placed_at = DateTime(required=True)


@workroom.event(part_of="Order")
class OrderRevised:
    """Sales edited an existing order."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    spec_recomputed = Boolean(default=False)
    revised_by = String(required=True)
    revised_at = DateTime(required=True)


@workroom.event(part_of="Order")
class OrderStatusAdvanced:
    """The production floor moved an order one step forward."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    advanced_by = String(required=True)
    advanced_at = DateTime(required=True)


@workroom.event(part_of="Order")
class OrderStatusOverridden:
    """Sales assigned a status directly, bypassing the production workflow."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    overridden_by = String(required=True)
    overridden_at = DateTime(required=True)
