"""Shared BDD fixtures and step definitions for the workroom domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from workroom.order.events import (
    OrderPlaced,
    OrderRevised,
    OrderStatusAdvanced,
    OrderStatusOverridden,
)
from workroom.order.order import Order

_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "OrderRevised": OrderRevised,
    "OrderStatusAdvanced": OrderStatusAdvanced,
    "OrderStatusOverridden": OrderStatusOverridden,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a pending fabric order", target_fixture="order")
def pending_fabric_order():
    order = Order.place(
        order_number="DDI-673",
        order_type="normal",
        customer_name="Asha Verma",
        width=48,
        height=60,
        fabric_code="FB-201",
    )
    order._events.clear()
    return order


@given(parsers.cfparse('a wooden order {width:g} wide and {height:g} high on "{base_size}" slats'), target_fixture="order")
def wooden_order(width, height, base_size):
    order = Order.place(
        order_number="DDI-674",
        order_type="wooden",
        customer_name="Ravi Kumar",
        width=width,
        height=height,
        base_size=base_size,
        operating_side="left",
    )
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then("the order action fails with a validation error")
def order_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} event is raised"))
def order_event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in order._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"


@then("no event is raised")
def no_event_raised(order):
    assert order._events == []
