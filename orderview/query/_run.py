"""
Query execution — filter, then sort, then aggregate.

Pure: no I/O, no state, and the input sequence is only read.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from orderview.domain import FilterCriteria, Order
from orderview.query._filter import predicate
from orderview.query._types import QueryResult


def newest_first(orders: Iterable[Order]) -> tuple[Order, ...]:
    """
    Sort by created_at descending, comparing the raw ISO strings.

    sorted() is stable with reverse=True, so orders sharing a timestamp
    keep their input order.
    """
    return tuple(sorted(orders, key=lambda order: order.created_at, reverse=True))


def revenue(orders: Iterable[Order]) -> Decimal:
    """Exact, unrounded sum of order totals."""
    return sum((order.total for order in orders), Decimal(0))


def query(orders: Iterable[Order], criteria: FilterCriteria | None = None) -> QueryResult:
    """
    Derive the visible orders and their revenue.

    Example:
        result = query(store.orders, FilterCriteria(search_text=Some("bo")))
        result.visible_orders   # matching orders, newest first
        result.total_revenue    # Decimal sum of their totals
    """
    keep = predicate(criteria if criteria is not None else FilterCriteria())
    visible = newest_first(order for order in orders if keep(order))
    return QueryResult(visible_orders=visible, total_revenue=revenue(visible))


__all__ = ("newest_first", "revenue", "query")
