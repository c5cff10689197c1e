"""
View snapshot — everything a table needs to draw the order list.

No markup, no widgets: plain strings and flags derived from the load
state, the loaded orders and the current criteria.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from kungfu import Nothing, Option, Some

from orderview.domain import FilterCriteria, Failed, LoadState, Loading, Order
from orderview.query import QueryResult, query

if TYPE_CHECKING:
    from orderview.store import OrderStore

EMPTY_MESSAGE = "No orders found"
CENT = Decimal("0.01")


def format_money(amount: Decimal) -> str:
    """Two-decimal dollar amount: Decimal("10.5") -> "$10.50"."""
    return f"${amount.quantize(CENT, rounding=ROUND_HALF_UP)}"


@dataclass(frozen=True, slots=True)
class OrderRow:
    id: int
    customer_name: str
    total: str
    status: str
    created_at: str
    is_cancelled: bool

    @classmethod
    def of(cls, order: Order) -> OrderRow:
        return cls(
            id=order.id,
            customer_name=order.customer_name,
            total=format_money(order.total),
            status=order.status.value,
            created_at=order.created_at,
            is_cancelled=order.is_cancelled,
        )


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """
    Display-ready projection of one moment of the order view.

    is_empty is only true once loading has finished, so "no orders found"
    never flashes while a load is in flight.
    """

    loaded_count: int
    is_loading: bool
    error: Option[str]
    result: QueryResult
    rows: tuple[OrderRow, ...]

    @property
    def heading(self) -> str:
        return f"Orders ({self.loaded_count})"

    @property
    def summary(self) -> str:
        return (
            f"Showing {self.result.count} orders, "
            f"total revenue: {format_money(self.result.total_revenue)}"
        )

    @property
    def is_empty(self) -> bool:
        return not self.is_loading and self.result.is_empty

    @property
    def empty_message(self) -> str:
        return EMPTY_MESSAGE


def build_view(
    state: LoadState,
    orders: Sequence[Order],
    criteria: FilterCriteria | None = None,
) -> ViewSnapshot:
    """
    Combine load state, loaded orders and criteria into a ViewSnapshot.

    Example:
        view = build_view(store.current_state(), store.orders, criteria)
        print(view.heading)     # "Orders (2)"
        print(view.summary)     # "Showing 1 orders, total revenue: $20.00"
    """
    result = query(orders, criteria)
    match state:
        case Failed(message):
            error: Option[str] = Some(message)
        case _:
            error = Nothing()
    return ViewSnapshot(
        loaded_count=len(orders),
        is_loading=isinstance(state, Loading),
        error=error,
        result=result,
        rows=tuple(OrderRow.of(order) for order in result.visible_orders),
    )


def view_of(store: OrderStore, criteria: FilterCriteria | None = None) -> ViewSnapshot:
    return build_view(store.current_state(), store.orders, criteria)


__all__ = (
    "EMPTY_MESSAGE",
    "format_money",
    "OrderRow",
    "ViewSnapshot",
    "build_view",
    "view_of",
)
