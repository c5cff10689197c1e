"""
Query types.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from orderview.domain import Order


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Visible orders, newest first, with their exact revenue total."""

    visible_orders: tuple[Order, ...]
    total_revenue: Decimal

    @property
    def count(self) -> int:
        return len(self.visible_orders)

    @property
    def is_empty(self) -> bool:
        return not self.visible_orders


@dataclass(frozen=True, slots=True)
class InvalidCriteria:
    """Raw criteria input that cannot become a FilterCriteria field."""

    field: str
    value: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}={self.value!r}: {self.message}"


__all__ = ("QueryResult", "InvalidCriteria")
