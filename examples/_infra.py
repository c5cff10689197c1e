"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from decimal import Decimal

from kungfu import Some

from orderview.domain import Order, OrderStatus
from orderview.view import ViewSnapshot


# Sample data
SAMPLE_ORDERS: tuple[Order, ...] = (
    Order(1, "Alice", Decimal("10.00"), OrderStatus.PAID, "2024-01-01T00:00:00Z"),
    Order(2, "Bob", Decimal("20.00"), OrderStatus.PENDING, "2024-01-02T00:00:00Z"),
    Order(3, "Bobby Tables", Decimal("42.50"), OrderStatus.SHIPPED, "2024-01-03T09:15:00Z"),
    Order(4, "Carol", Decimal("7.25"), OrderStatus.CANCELLED, "2024-01-03T09:15:00Z"),
    Order(5, "Dmitri", Decimal("125.99"), OrderStatus.PAID, "2024-02-14T18:30:00Z"),
)


# Rendering
def format_table(headers: list[str], rows: list[list[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def fmt_row(cols: list[str]) -> str:
        return " | ".join(col.ljust(widths[i]) for i, col in enumerate(cols))

    sep = "-+-".join("-" * w for w in widths)
    return "\n".join([fmt_row(headers), sep, *(fmt_row(row) for row in rows)])


def print_view(view: ViewSnapshot) -> None:
    print(view.heading)
    if view.is_loading:
        print("  Loading...")
    match view.error:
        case Some(message):
            print(f"  ✗ {message}")
    print(f"  {view.summary}\n")

    rows = [
        [
            f"{row.id}{' ✗' if row.is_cancelled else ''}",
            row.customer_name,
            row.total,
            row.status,
            row.created_at,
        ]
        for row in view.rows
    ]
    print(format_table(["#", "Customer", "Total", "Status", "Created"], rows))
    if view.is_empty:
        print(view.empty_message)


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())
