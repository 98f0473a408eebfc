"""Pydantic API schemas for the workroom domain.

These are the external API contracts — separate from domain commands.
Order responses are flat: the wooden cut-list numbers sit at the top level
of the record, next to the dimensions they were derived from.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    order_type: Literal["normal", "wooden"]
    customer_name: str
    customer_email: str | None = None
    customer_phone: str | None = None
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    quantity: int = Field(default=1, ge=1)
    fabric_code: str | None = None
    image_url: str | None = None
    base_size: Literal["35mm", "50mm"] | None = None
    wooden_color_code: str | None = None
    operating_side: Literal["left", "right"] | None = None
    notes: str | None = None


class ReviseOrderRequest(BaseModel):
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    quantity: int | None = Field(default=None, ge=1)
    fabric_code: str | None = None
    image_url: str | None = None
    base_size: Literal["35mm", "50mm"] | None = None
    wooden_color_code: str | None = None
    operating_side: Literal["left", "right"] | None = None
    notes: str | None = None


class SetStatusRequest(BaseModel):
    status: Literal["pending", "in-progress", "ready", "completed"]


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class OrderPlacedResponse(BaseModel):
    order_id: str
    order_number: str
    warning: str | None = None


class StatusResponse(BaseModel):
    status: str


class AdvanceResponse(BaseModel):
    order_number: str
    status: str
    advanced: bool


class OrderResponse(BaseModel):
    id: str
    order_number: str
    order_type: str
    status: str
    status_label: str
    customer_name: str
    customer_email: str | None = None
    customer_phone: str | None = None
    width: float
    height: float
    quantity: int
    fabric_code: str | None = None
    image_url: str | None = None
    base_size: str | None = None
    wooden_color_code: str | None = None
    operating_side: str | None = None
    number_of_slats: int | None = None
    tilt_cord_length: float | None = None
    cord_length: float | None = None
    ladder_tape_size: float | None = None
    ms_road: float | None = None
    channel_uching: float | None = None
    channel_uching_cm: float | None = None
    notes: str | None = None
    created_at: datetime | None = None
    created_by: str | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None


class OrderListResponse(BaseModel):
    total: int
    pending: int
    orders: list[OrderResponse]


class ProductionBoardResponse(BaseModel):
    counts: dict[str, int]
    active: list[OrderResponse]
    completed: list[OrderResponse]
