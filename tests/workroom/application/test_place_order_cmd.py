"""Application tests for order placement via domain.process()."""

import re

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from workroom.order.order import Order
from workroom.order.placement import PlaceOrder
from workroom.order.store import OrderRepository


def _place(**overrides):
    defaults = {
        "order_type": "normal",
        "customer_name": "Asha Verma",
        "width": 48,
        "height": 60,
        "fabric_code": "FB-201",
    }
    defaults.update(overrides)
    return current_domain.process(PlaceOrder(**defaults), asynchronous=False)


def _get(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestPlaceOrderFlow:
    def test_returns_order_id_and_number(self):
        result = _place()
        assert result["order_id"] is not None
        assert result["order_number"] == "DDI-673"
        assert result["number_fallback"] is False

    def test_persists_order(self):
        result = _place()
        order = _get(result["order_id"])
        assert order.order_number == "DDI-673"
        assert order.status == "pending"
        assert order.fabric_code == "FB-201"

    def test_numbers_increment(self):
        numbers = [_place()["order_number"] for _ in range(3)]
        assert numbers == ["DDI-673", "DDI-674", "DDI-675"]

    def test_wooden_order_is_stored_with_spec(self):
        result = _place(order_type="wooden", width=40, height=60, base_size="50mm", fabric_code=None)
        order = _get(result["order_id"])
        assert order.wooden_spec.number_of_slats == 35
        assert order.wooden_spec.cord_length == 270

    def test_stamps_placing_actor(self):
        result = _place(placed_by="meera")
        assert _get(result["order_id"]).created_by == "meera"

    def test_invalid_order_is_not_stored(self):
        with pytest.raises(ValidationError):
            _place(width=0)
        assert current_domain.repository_for(Order).all_orders() == []


class TestPlaceOrderNumberFallback:
    def test_unreadable_collection_uses_timestamp_number(self, monkeypatch):
        def unavailable(self):
            raise ConnectionError("collection offline")

        monkeypatch.setattr(OrderRepository, "all_orders", unavailable)
        result = _place()

        assert result["number_fallback"] is True
        assert re.fullmatch(r"DDI-\d{13}", result["order_number"])
        assert _get(result["order_id"]).order_number == result["order_number"]
