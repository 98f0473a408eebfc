"""FastAPI routes for the workroom domain.

Two surfaces over the same order collection: ``/orders`` for sales (intake,
edits, direct status corrections) and ``/production`` for the workshop floor
(queue view and one-step advance). The acting user is taken from the
``X-Actor`` header supplied by the session layer in front of this API.
"""

from fastapi import APIRouter, FastAPI, Header, Request
from fastapi.responses import JSONResponse
from protean.exceptions import TransactionError
from protean.utils.globals import current_domain

from workroom.api.schemas import (
    AdvanceResponse,
    OrderListResponse,
    OrderPlacedResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductionBoardResponse,
    ReviseOrderRequest,
    SetStatusRequest,
    StatusResponse,
)
from workroom.consoles.production import ProductionConsole
from workroom.consoles.sales import SalesConsole
from workroom.order.order import Order
from workroom.order.placement import PlaceOrder
from workroom.order.progress import AdvanceOrderStatus, SetOrderStatus
from workroom.order.revision import ReviseOrder
from workroom.order.store import OrderStore, OrderStoreError
from workroom.order.workflow import status_label


def order_response(order: Order) -> OrderResponse:
    """Flatten an order aggregate into its API record."""
    spec = order.wooden_spec
    return OrderResponse(
        id=str(order.id),
        order_number=order.order_number,
        order_type=order.order_type,
        status=order.status,
        status_label=status_label(order.status),
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        width=order.width,
        height=order.height,
        quantity=order.quantity,
        fabric_code=order.fabric_code,
        image_url=order.image_url,
        base_size=order.base_size,
        wooden_color_code=order.wooden_color_code,
        operating_side=order.operating_side,
        number_of_slats=spec.number_of_slats if spec else None,
        tilt_cord_length=spec.tilt_cord_length if spec else None,
        cord_length=spec.cord_length if spec else None,
        ladder_tape_size=spec.ladder_tape_size if spec else None,
        ms_road=spec.ms_road if spec else None,
        channel_uching=spec.channel_uching if spec else None,
        channel_uching_cm=spec.channel_uching_cm if spec else None,
        notes=order.notes,
        created_at=order.created_at,
        created_by=order.created_by,
        updated_at=order.updated_at,
        updated_by=order.updated_by,
    )


def register_store_error_handler(app: FastAPI) -> None:
    """Report store outages as 503 so clients know the action can be retried."""

    @app.exception_handler(OrderStoreError)
    async def store_error_handler(_request: Request, exc: OrderStoreError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(TransactionError)
    async def commit_error_handler(_request: Request, exc: TransactionError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": "Order could not be saved"})


# ---------------------------------------------------------------------------
# Sales Router
# ---------------------------------------------------------------------------
orders_router = APIRouter(prefix="/orders", tags=["orders"])


@orders_router.post("", status_code=201, response_model=OrderPlacedResponse)
async def place_order(body: PlaceOrderRequest, x_actor: str = Header(default="")) -> OrderPlacedResponse:
    """Take a new order; the number and wooden cut-list are assigned here."""
    command = PlaceOrder(placed_by=x_actor or None, **body.model_dump(exclude_none=True))
    result = current_domain.process(command, asynchronous=False)
    warning = None
    if result["number_fallback"]:
        warning = f"Order numbering is unavailable; {result['order_number']} is out of sequence"
    return OrderPlacedResponse(
        order_id=result["order_id"],
        order_number=result["order_number"],
        warning=warning,
    )


@orders_router.get("", response_model=OrderListResponse)
async def list_orders() -> OrderListResponse:
    """Every order, newest first."""
    console = SalesConsole()
    console.refresh()
    return OrderListResponse(
        total=len(console.orders),
        pending=len(console.pending_orders),
        orders=[order_response(order) for order in console.orders],
    )


@orders_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return order_response(OrderStore().get(order_id))


@orders_router.put("/{order_id}", response_model=StatusResponse)
async def revise_order(order_id: str, body: ReviseOrderRequest, x_actor: str = Header(default="")) -> StatusResponse:
    """Edit an order; wooden cut-lists are derived again when the size changes."""
    command = ReviseOrder(
        order_id=order_id,
        revised_by=x_actor or None,
        **body.model_dump(exclude_none=True),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="revised")


@orders_router.put("/{order_id}/status", response_model=StatusResponse)
async def set_order_status(order_id: str, body: SetStatusRequest, x_actor: str = Header(default="")) -> StatusResponse:
    """Assign any status directly (sales correction)."""
    command = SetOrderStatus(order_id=order_id, status=body.status, set_by=x_actor or None)
    new_status = current_domain.process(command, asynchronous=False)
    return StatusResponse(status=new_status)


# ---------------------------------------------------------------------------
# Production Router
# ---------------------------------------------------------------------------
production_router = APIRouter(prefix="/production", tags=["production"])


@production_router.get("/board", response_model=ProductionBoardResponse)
async def production_board() -> ProductionBoardResponse:
    """Unfinished orders, completed orders and per-status counts."""
    console = ProductionConsole()
    console.refresh()
    return ProductionBoardResponse(
        counts=console.status_counts(),
        active=[order_response(order) for order in console.active_orders],
        completed=[order_response(order) for order in console.completed_orders],
    )


@production_router.put("/orders/{order_id}/advance", response_model=AdvanceResponse)
async def advance_order(order_id: str, x_actor: str = Header(default="")) -> AdvanceResponse:
    """Move an order one step forward; completed orders are left as they are."""
    command = AdvanceOrderStatus(order_id=order_id, advanced_by=x_actor or None)
    new_status = current_domain.process(command, asynchronous=False)
    order = OrderStore().get(order_id)
    return AdvanceResponse(
        order_number=order.order_number,
        status=order.status,
        advanced=new_status is not None,
    )
