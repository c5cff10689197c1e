"""Display-ready snapshots."""

from __future__ import annotations

from decimal import Decimal

import pytest
from kungfu import Nothing, Some

from orderview.domain import FilterCriteria, Failed, Idle, Loading, OrderStatus, Ready
from orderview.source import MemorySource
from orderview.store import OrderStore
from orderview.view import EMPTY_MESSAGE, OrderRow, build_view, format_money, view_of
from tests.factories import ALICE, BOB, make_order


@pytest.mark.parametrize(
    ("amount", "text"),
    [
        (Decimal(0), "$0.00"),
        (Decimal("10.5"), "$10.50"),
        (Decimal("30"), "$30.00"),
        (Decimal("0.005"), "$0.01"),
        (Decimal("1234.567"), "$1234.57"),
    ],
)
def test_format_money(amount, text):
    assert format_money(amount) == text


def test_ready_view(scenario_orders):
    view = build_view(Ready(tuple(scenario_orders)), scenario_orders, FilterCriteria())

    assert view.heading == "Orders (2)"
    assert view.summary == "Showing 2 orders, total revenue: $30.00"
    assert view.error == Nothing()
    assert not view.is_loading
    assert not view.is_empty
    assert [row.id for row in view.rows] == [2, 1]
    assert view.rows[1] == OrderRow(1, "Alice", "$10.00", "paid", "2024-01-01T00:00:00Z", False)


def test_heading_counts_loaded_orders_not_visible_ones(scenario_orders):
    criteria = FilterCriteria(min_total=Some(Decimal(15)))
    view = build_view(Ready(tuple(scenario_orders)), scenario_orders, criteria)

    assert view.heading == "Orders (2)"
    assert view.summary == "Showing 1 orders, total revenue: $20.00"


def test_empty_only_when_not_loading(scenario_orders):
    nothing_matches = FilterCriteria(search_text=Some("zed"))

    loading = build_view(Loading(), scenario_orders, nothing_matches)
    assert loading.is_loading
    assert not loading.is_empty

    done = build_view(Ready(tuple(scenario_orders)), scenario_orders, nothing_matches)
    assert done.is_empty
    assert done.empty_message == EMPTY_MESSAGE == "No orders found"


def test_idle_with_no_orders_is_empty():
    view = build_view(Idle(), ())
    assert view.is_empty
    assert view.heading == "Orders (0)"
    assert view.summary == "Showing 0 orders, total revenue: $0.00"


def test_failed_view_shows_static_message_and_last_orders(scenario_orders):
    view = build_view(Failed(), scenario_orders)

    assert view.error == Some("Failed to load orders")
    assert len(view.rows) == 2


def test_cancelled_rows_are_flagged():
    cancelled = make_order(3, "Carol", "7.25", OrderStatus.CANCELLED, "2024-01-03T00:00:00Z")
    view = build_view(Ready((ALICE, BOB, cancelled)), (ALICE, BOB, cancelled))

    assert [(row.id, row.is_cancelled) for row in view.rows] == [(3, True), (2, False), (1, False)]
    assert view.rows[0].total == "$7.25"


@pytest.mark.asyncio
async def test_view_of_store(scenario_orders):
    source = MemorySource(scenario_orders)
    store = OrderStore(source)

    assert view_of(store).is_empty

    await store.load()
    view = view_of(store, FilterCriteria(status=OrderStatus.PAID))
    assert view.heading == "Orders (2)"
    assert [row.customer_name for row in view.rows] == ["Alice"]

    source.fail_next()
    await store.load()
    failed = view_of(store)
    assert failed.error == Some("Failed to load orders")
    assert failed.heading == "Orders (2)"
