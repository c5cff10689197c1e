"""
Order domain — the records the view displays.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

# ═══════════════════════════════════════════════════════════════════════════════
# Order Status
# ═══════════════════════════════════════════════════════════════════════════════


class OrderStatus(Enum):
    """Lifecycle status of an order, valued by its wire spelling."""

    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


# ═══════════════════════════════════════════════════════════════════════════════
# Order
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Order:
    """
    A purchase record.

    Orders are immutable: a successful load replaces the whole collection,
    nothing updates an order in place.

    created_at is fixed-width ISO-8601 text, so plain string comparison
    orders it chronologically.

    Example:
        Order(1, "Alice", Decimal("10.00"), OrderStatus.PAID, "2024-01-01T00:00:00Z")
    """

    id: int
    customer_name: str
    total: Decimal
    status: OrderStatus
    created_at: str

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValueError(f"Order {self.id}: total must be non-negative, got {self.total}")

    @property
    def is_cancelled(self) -> bool:
        return self.status is OrderStatus.CANCELLED


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "OrderStatus",
    "Order",
)
