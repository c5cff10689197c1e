"""
Filter predicates — one per criterion.

A criterion that is absent (Nothing / "all") always passes.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

from kungfu import Option, Some

from orderview.domain import ALL, FilterCriteria, Order, StatusFilter

type Predicate = Callable[[Order], bool]


def matches_search(order: Order, search_text: Option[str]) -> bool:
    """Case-insensitive substring match on the customer name."""
    match search_text:
        case Some(text):
            return text.casefold() in order.customer_name.casefold()
        case _:
            return True


def matches_status(order: Order, status: StatusFilter) -> bool:
    return status == ALL or order.status is status


def matches_min_total(order: Order, min_total: Option[Decimal]) -> bool:
    match min_total:
        case Some(amount):
            return order.total >= amount
        case _:
            return True


def predicate(criteria: FilterCriteria) -> Predicate:
    """Combine every criterion into one predicate."""
    search_text = criteria.search_text
    status = criteria.status
    min_total = criteria.min_total

    def keep(order: Order) -> bool:
        return (
            matches_search(order, search_text)
            and matches_status(order, status)
            and matches_min_total(order, min_total)
        )

    return keep


__all__ = (
    "Predicate",
    "matches_search",
    "matches_status",
    "matches_min_total",
    "predicate",
)
