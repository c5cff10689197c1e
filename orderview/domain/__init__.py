"""
Domain — orders, load state and filter criteria.

    from orderview import domain as D

    order = D.Order(1, "Alice", Decimal("10"), D.OrderStatus.PAID, "2024-01-01T00:00:00Z")

    match store.current_state():
        case D.Ready(orders): ...
        case D.Failed(message): ...
"""

from orderview.domain._types import (
    OrderStatus,
    Order,
)
from orderview.domain._state import (
    FAILED_TO_LOAD,
    Idle,
    Loading,
    Ready,
    Failed,
    LoadState,
)
from orderview.domain._criteria import (
    ALL,
    StatusFilter,
    FilterCriteria,
)

__all__ = (
    # Orders
    "OrderStatus",
    "Order",
    # Load state
    "FAILED_TO_LOAD",
    "Idle",
    "Loading",
    "Ready",
    "Failed",
    "LoadState",
    # Criteria
    "ALL",
    "StatusFilter",
    "FilterCriteria",
)
