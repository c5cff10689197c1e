"""
Filter criteria — what the display asks the query to narrow by.

Every field is explicit: Nothing means "no constraint", so an empty
search string or a zero minimum is a real (if permissive) constraint
rather than a falsy stand-in for "unset".
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Literal

from kungfu import Option, Some, Nothing

from orderview.domain._types import OrderStatus

ALL: Literal["all"] = "all"

type StatusFilter = OrderStatus | Literal["all"]


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """
    Predicate parameters for a query.

    Construction raises ValueError for values query() could not compare,
    such as a negative or NaN minimum or a status given as plain text.

    Example:
        criteria = FilterCriteria().with_status(OrderStatus.PAID).with_min_total(Some(Decimal(15)))
    """

    search_text: Option[str] = field(default_factory=Nothing)
    status: StatusFilter = ALL
    min_total: Option[Decimal] = field(default_factory=Nothing)

    def __post_init__(self) -> None:
        match self.search_text:
            case Some(text) if not isinstance(text, str):
                raise ValueError(f"search_text must be text, got {text!r}")
        if self.status != ALL and not isinstance(self.status, OrderStatus):
            raise ValueError(f"status must be an OrderStatus or {ALL!r}, got {self.status!r}")
        match self.min_total:
            case Some(amount) if not (
                isinstance(amount, Decimal) and amount.is_finite() and amount >= 0
            ):
                raise ValueError(f"min_total must be a finite non-negative Decimal, got {amount!r}")

    def with_search(self, search_text: Option[str]) -> FilterCriteria:
        return replace(self, search_text=search_text)

    def with_status(self, status: StatusFilter) -> FilterCriteria:
        return replace(self, status=status)

    def with_min_total(self, min_total: Option[Decimal]) -> FilterCriteria:
        return replace(self, min_total=min_total)


__all__ = (
    "ALL",
    "StatusFilter",
    "FilterCriteria",
)
