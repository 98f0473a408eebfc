"""Order aggregate (CQRS) — one customer order and its manufacturing specification.

An order is either a fabric ("normal") blind, which carries a fabric code and
an optional reference image, or a wooden slat blind, which carries the base
size, operating side, color code and the cut-list derived from its size. The
type is fixed at placement; the fields of the other type are never present.

Every change is written back as a whole record, so each method leaves the
aggregate complete and self-consistent, stamps the acting user, and raises a
single event.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text, ValueObject

from workroom.domain import workroom
from workroom.order.events import (
    OrderPlaced,
    OrderRevised,
    OrderStatusAdvanced,
    OrderStatusOverridden,
)
from workroom.order.specification import BaseSize, WoodenSpec, derive_wooden_spec
from workroom.order.workflow import OrderStatus, next_status

# Stamped when the caller supplies no identity
DEFAULT_SALES_ACTOR = "admin"
DEFAULT_PRODUCTION_ACTOR = "production"

# Sentinel for distinguishing "not provided" from None in partial edits
_UNSET = object()


class OrderType(Enum):
    NORMAL = "normal"
    WOODEN = "wooden"


class OperatingSide(Enum):
    LEFT = "left"
    RIGHT = "right"


_WOODEN_ONLY_FIELDS = ("base_size", "wooden_color_code", "operating_side", "wooden_spec")
_WOODEN_REQUIRED_FIELDS = ("base_size", "operating_side", "wooden_spec")
_NORMAL_ONLY_FIELDS = ("fabric_code", "image_url")
_DERIVED_FIELDS = (
    "number_of_slats",
    "tilt_cord_length",
    "cord_length",
    "ladder_tape_size",
    "ms_road",
    "channel_uching",
    "channel_uching_cm",
)


def _coerce(enum_cls, value, field_name):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError({field_name: [f"'{value}' is not one of: {allowed}"]}) from None


def _validate_dimensions(width, height) -> None:
    errors = {}
    if width is None or width <= 0:
        errors["width"] = ["Width must be greater than zero"]
    if height is None or height <= 0:
        errors["height"] = ["Height must be greater than zero"]
    if errors:
        raise ValidationError(errors)


# ---------------------------------------------------------------------------
# Aggregate Root (CQRS)
# ---------------------------------------------------------------------------
@workroom.aggregate
class Order:
    order_number = String(required=True, max_length=50)
    order_type = String(required=True, choices=OrderType)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    customer_name = String(required=True, max_length=200)
    customer_email = String(max_length=254)
    customer_phone = String(max_length=50)
    width = Float(required=True)
    height = Float(required=True)
    quantity = Integer(required=True, min_value=1)

    # Normal (fabric) blinds
    fabric_code = String(max_length=100)
    image_url = String(max_length=1000)

    # Wooden blinds
    base_size = String(choices=BaseSize)
    wooden_color_code = String(max_length=100)
    operating_side = String(choices=OperatingSide)
    wooden_spec = ValueObject(WoodenSpec)

    notes = Text()
    created_at = DateTime()
    created_by = String(max_length=255)
    updated_at = DateTime()
    updated_by = String(max_length=255)

    @invariant.post
    def dimensions_must_be_positive(self):
        _validate_dimensions(self.width, self.height)

    @invariant.post
    def type_specific_fields_match_order_type(self):
        if self.order_type == OrderType.WOODEN.value:
            missing = [name for name in _WOODEN_REQUIRED_FIELDS if getattr(self, name) is None]
            if missing:
                raise ValidationError({name: ["Required for wooden orders"] for name in missing})
            stray = [name for name in _NORMAL_ONLY_FIELDS if getattr(self, name)]
        else:
            stray = [name for name in _WOODEN_ONLY_FIELDS if getattr(self, name) is not None]
        if stray:
            raise ValidationError({name: [f"Not applicable to {self.order_type} orders"] for name in stray})

    @invariant.post
    def wooden_spec_is_complete(self):
        if self.wooden_spec is None:
            return
        missing = [name for name in _DERIVED_FIELDS if getattr(self.wooden_spec, name) is None]
        if missing:
            raise ValidationError({"wooden_spec": [f"Missing derived field(s): {', '.join(missing)}"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number: str,
        order_type: str,
        customer_name: str,
        width: float,
        height: float,
        quantity: int = 1,
        customer_email: str | None = None,
        customer_phone: str | None = None,
        fabric_code: str | None = None,
        image_url: str | None = None,
        base_size: str | None = None,
        wooden_color_code: str | None = None,
        operating_side: str | None = None,
        notes: str | None = None,
        placed_by: str | None = None,
    ):
        """Take a new order: validate the size, derive the cut-list, stamp the creator."""
        kind = _coerce(OrderType, order_type, "order_type")
        _validate_dimensions(width, height)

        now = datetime.now(UTC)
        actor = placed_by or DEFAULT_SALES_ACTOR
        if kind == OrderType.WOODEN:
            size = _coerce(BaseSize, base_size or BaseSize.MM_35.value, "base_size")
            side = _coerce(OperatingSide, operating_side or OperatingSide.LEFT.value, "operating_side")
            type_fields = {
                "base_size": size.value,
                "wooden_color_code": wooden_color_code,
                "operating_side": side.value,
                "wooden_spec": derive_wooden_spec(width, height, size),
            }
        else:
            type_fields = {"fabric_code": fabric_code, "image_url": image_url}

        order = cls(
            order_number=order_number,
            order_type=kind.value,
            status=OrderStatus.PENDING.value,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            width=width,
            height=height,
            quantity=quantity,
            notes=notes,
            created_at=now,
            created_by=actor,
            updated_at=now,
            updated_by=actor,
            **type_fields,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                order_type=kind.value,
                customer_name=customer_name,
                width=order.width,
                height=order.height,
                quantity=order.quantity,
                number_of_slats=order.wooden_spec.number_of_slats if order.wooden_spec else None,
                placed_by=actor,
                placed_at=now,
            )
        )
        return order

    @property
    def is_wooden(self) -> bool:
        return self.order_type == OrderType.WOODEN.value

    def _stamp(self, actor: str) -> datetime:
        now = datetime.now(UTC)
        # Audit timestamps never run backwards, even when the clock does
        if self.updated_at is not None and self.updated_at > now:
            now = self.updated_at
        self.updated_at = now
        self.updated_by = actor
        return now

    # -------------------------------------------------------------------
    # Sales edits
    # -------------------------------------------------------------------
    def revise(
        self,
        customer_name=_UNSET,
        customer_email=_UNSET,
        customer_phone=_UNSET,
        width=_UNSET,
        height=_UNSET,
        quantity=_UNSET,
        fabric_code=_UNSET,
        image_url=_UNSET,
        base_size=_UNSET,
        wooden_color_code=_UNSET,
        operating_side=_UNSET,
        notes=_UNSET,
        revised_by: str | None = None,
    ) -> bool:
        """Edit the mutable fields of the order.

        Order number, type, status and creation stamps are kept as they are.
        When a wooden order's width, height or base size changes, the cut-list
        is derived again in the same write. Returns whether it was.
        """
        new_width = self.width if width is _UNSET else width
        new_height = self.height if height is _UNSET else height
        _validate_dimensions(new_width, new_height)

        new_base_size = self.base_size
        if base_size is not _UNSET and base_size is not None:
            new_base_size = _coerce(BaseSize, base_size, "base_size").value
        new_side = self.operating_side
        if operating_side is not _UNSET and operating_side is not None:
            new_side = _coerce(OperatingSide, operating_side, "operating_side").value

        recompute = self.is_wooden and (
            new_width != self.width or new_height != self.height or new_base_size != self.base_size
        )

        edits = {
            "customer_name": customer_name,
            "customer_email": customer_email,
            "customer_phone": customer_phone,
            "quantity": quantity,
            "notes": notes,
        }
        # Fields of the other order type are never written
        if self.is_wooden:
            edits["wooden_color_code"] = wooden_color_code
        else:
            edits.update(fabric_code=fabric_code, image_url=image_url)

        actor = revised_by or DEFAULT_SALES_ACTOR
        with atomic_change(self):
            self.width = new_width
            self.height = new_height
            for name, value in edits.items():
                if value is not _UNSET:
                    setattr(self, name, value)
            if self.is_wooden:
                self.base_size = new_base_size
                self.operating_side = new_side
            if recompute:
                self.wooden_spec = derive_wooden_spec(self.width, self.height, self.base_size)
            now = self._stamp(actor)

        self.raise_(
            OrderRevised(
                order_id=str(self.id),
                order_number=self.order_number,
                spec_recomputed=recompute,
                revised_by=actor,
                revised_at=now,
            )
        )
        return recompute

    # -------------------------------------------------------------------
    # Status changes
    # -------------------------------------------------------------------
    def advance(self, advanced_by: str | None = None) -> OrderStatus | None:
        """Move the order one step along the production workflow.

        Returns the new status, or None when the order is already completed;
        in that case nothing changes and no event is raised.
        """
        previous = OrderStatus(self.status)
        target = next_status(previous)
        if target is None:
            return None

        actor = advanced_by or DEFAULT_PRODUCTION_ACTOR
        self.status = target.value
        now = self._stamp(actor)
        self.raise_(
            OrderStatusAdvanced(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=previous.value,
                status=target.value,
                advanced_by=actor,
                advanced_at=now,
            )
        )
        return target

    def set_status(self, status: str, set_by: str | None = None) -> OrderStatus:
        """Assign any status directly, bypassing the workflow (sales correction)."""
        target = _coerce(OrderStatus, status, "status")
        previous = self.status

        actor = set_by or DEFAULT_SALES_ACTOR
        self.status = target.value
        now = self._stamp(actor)
        self.raise_(
            OrderStatusOverridden(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=previous,
                status=target.value,
                overridden_by=actor,
                overridden_at=now,
            )
        )
        return target
