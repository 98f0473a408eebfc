"""Application tests for the sales and production consoles."""

import re

from protean import current_domain
from protean.adapters.repository.memory import MemorySession
from workroom.consoles.production import ProductionConsole
from workroom.consoles.sales import SalesConsole
from workroom.order.order import Order
from workroom.order.store import OrderRepository


def _failing(self, *args, **kwargs):
    raise ConnectionError("collection offline")


def _failing_commit(self, *args, **kwargs):
    raise ConnectionError("collection offline at commit")


def _normal_order(**overrides):
    fields = {
        "order_type": "normal",
        "customer_name": "Asha Verma",
        "width": 48,
        "height": 60,
        "quantity": 2,
        "fabric_code": "FB-201",
    }
    fields.update(overrides)
    return fields


def _wooden_order(**overrides):
    fields = {
        "order_type": "wooden",
        "customer_name": "Ravi Kumar",
        "width": 40,
        "height": 60,
        "base_size": "35mm",
        "operating_side": "left",
        "wooden_color_code": "WD-7",
    }
    fields.update(overrides)
    return fields


class TestSalesConsole:
    def test_create_order_reports_number(self):
        with SalesConsole(actor="meera") as sales:
            outcome = sales.create_order(**_normal_order())
        assert outcome.ok is True
        assert outcome.order_number == "DDI-673"
        assert outcome.message == "Order DDI-673 created successfully!"
        assert outcome.warning is None

    def test_open_console_receives_new_order(self):
        with SalesConsole(actor="meera") as sales:
            assert sales.orders == []
            outcome = sales.create_order(**_normal_order())
            assert [order.order_number for order in sales.orders] == [outcome.order_number]
            assert sales.orders[0].created_by == "meera"
            assert sales.summary() == "1 total orders • 1 pending"

    def test_create_order_with_invalid_size(self):
        with SalesConsole() as sales:
            outcome = sales.create_order(**_normal_order(width=0))
            assert outcome.ok is False
            assert outcome.message == "Failed to save order"
            assert "width" in outcome.errors
            assert sales.orders == []

    def test_create_order_with_numbering_outage(self, monkeypatch):
        with SalesConsole() as sales:
            monkeypatch.setattr(OrderRepository, "all_orders", _failing)
            outcome = sales.create_order(**_normal_order())

        assert outcome.ok is True
        assert re.fullmatch(r"DDI-\d{13}", outcome.order_number)
        assert outcome.warning == f"Order numbering is unavailable; {outcome.order_number} is out of sequence"

    def test_failed_save_keeps_console_unchanged(self, monkeypatch):
        with SalesConsole() as sales:
            sales.create_order(**_normal_order())
            before = list(sales.orders)

            monkeypatch.setattr(OrderRepository, "add", _failing)
            outcome = sales.create_order(**_normal_order(customer_name="Second"))

            assert outcome.ok is False
            assert outcome.message == "Failed to save order"
            assert outcome.warning == "Please try again"
            assert sales.orders == before

    def test_failed_commit_reports_failure(self, monkeypatch):
        with SalesConsole() as sales:
            monkeypatch.setattr(MemorySession, "commit", _failing_commit)
            outcome = sales.create_order(**_normal_order())

            assert outcome.ok is False
            assert outcome.message == "Failed to save order"
            assert outcome.warning == "Please try again"
            assert sales.orders == []

    def test_revise_order(self):
        with SalesConsole() as sales:
            created = sales.create_order(**_wooden_order())
            outcome = sales.revise_order(created.order_id, height=72)
            assert outcome.ok is True
            assert outcome.message == "Order updated successfully!"
            assert sales.find(created.order_id).wooden_spec.number_of_slats == 58

    def test_revise_unknown_order(self):
        outcome = SalesConsole().revise_order("missing-order", notes="x")
        assert outcome.ok is False
        assert outcome.message == "Order not found"

    def test_set_status(self):
        with SalesConsole() as sales:
            created = sales.create_order(**_normal_order())
            outcome = sales.set_status(created.order_id, "completed")
            assert outcome.message == "Order status updated to completed"
            assert outcome.order_number == "DDI-673"
            assert sales.pending_orders == []

    def test_set_unknown_status(self):
        with SalesConsole() as sales:
            created = sales.create_order(**_normal_order())
            outcome = sales.set_status(created.order_id, "shipped")
            assert outcome.ok is False
            assert outcome.message == "Failed to update order status"
            assert sales.find(created.order_id).status == "pending"

    def test_find_by_number(self):
        with SalesConsole() as sales:
            created = sales.create_order(**_normal_order())
            assert str(sales.find_by_number("DDI-673").id) == created.order_id
            assert sales.find_by_number("DDI-999") is None


class TestProductionConsole:
    def test_sees_orders_created_by_sales(self):
        with ProductionConsole() as production, SalesConsole() as sales:
            created = sales.create_order(**_wooden_order())
            assert [str(order.id) for order in production.active_orders] == [created.order_id]
            assert production.completed_orders == []

    def test_advance_one_step(self):
        with ProductionConsole() as production, SalesConsole() as sales:
            created = sales.create_order(**_normal_order())
            assert production.next_action(created.order_id) == "Mark as In Progress"

            outcome = production.advance(created.order_id)
            assert outcome.ok is True
            assert outcome.message == "Order DDI-673 updated to in-progress"
            assert production.find(created.order_id).status == "in-progress"
            assert production.find(created.order_id).updated_by == "production"
            assert sales.find(created.order_id).status == "in-progress"

    def test_completed_orders_move_to_separate_list(self):
        with ProductionConsole() as production, SalesConsole() as sales:
            created = sales.create_order(**_normal_order())
            for _ in range(3):
                production.advance(created.order_id)
            assert production.active_orders == []
            assert [order.order_number for order in production.completed_orders] == ["DDI-673"]
            assert production.next_action(created.order_id) is None

    def test_advance_completed_order(self):
        with ProductionConsole() as production, SalesConsole() as sales:
            created = sales.create_order(**_normal_order())
            sales.set_status(created.order_id, "completed")
            outcome = production.advance(created.order_id)
            assert outcome.ok is True
            assert outcome.message == "Order DDI-673 is already completed"
            assert production.find(created.order_id).status == "completed"

    def test_status_counts(self):
        with ProductionConsole() as production, SalesConsole() as sales:
            first = sales.create_order(**_normal_order())
            sales.create_order(**_wooden_order())
            production.advance(first.order_id)
            assert production.status_counts() == {
                "pending": 1,
                "in-progress": 1,
                "ready": 0,
                "completed": 0,
            }

    def test_failed_advance_keeps_console_unchanged(self, monkeypatch):
        with ProductionConsole() as production, SalesConsole() as sales:
            created = sales.create_order(**_normal_order())
            monkeypatch.setattr(OrderRepository, "add", _failing)

            outcome = production.advance(created.order_id)
            assert outcome.ok is False
            assert outcome.message == "Failed to update order status"
            assert outcome.warning == "Please try again"
            assert production.find(created.order_id).status == "pending"

    def test_failed_commit_keeps_console_unchanged(self, monkeypatch):
        with ProductionConsole() as production, SalesConsole() as sales:
            created = sales.create_order(**_normal_order())
            monkeypatch.setattr(MemorySession, "commit", _failing_commit)

            outcome = production.advance(created.order_id)
            assert outcome.ok is False
            assert outcome.warning == "Please try again"
            assert production.find(created.order_id).status == "pending"

    def test_refresh_without_subscribing(self):
        SalesConsole().create_order(**_normal_order())
        production = ProductionConsole()
        assert production.is_open is False
        production.refresh()
        assert len(production.orders) == 1
        assert production.refreshed_at is not None

    def test_closed_console_stops_updating(self):
        production = ProductionConsole().open()
        assert production.is_open is True
        production.close()
        SalesConsole().create_order(**_normal_order())
        assert production.orders == []
        assert current_domain.repository_for(Order).all_orders() != []
