"""
In-memory source — fixed orders with optional latency and failures.

For demos, tests and local development without an order service.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence

from combinators import lift as L

from orderview._types import Lazy
from orderview.domain import Order
from orderview.store import LoadFailure, LoadFailureError, LoadFailureKind


class MemorySource:
    """
    OrderSource over a list held in memory.

    Example:
        source = MemorySource(orders, latency=0.05)
        source.fail_next(2)       # the next two loads fail
        source.replace(newer)     # later loads see the new list
    """

    def __init__(self, orders: Iterable[Order] = (), *, latency: float = 0.0) -> None:
        self._orders = tuple(orders)
        self._latency = latency
        self._failures_pending = 0
        self.calls = 0

    def replace(self, orders: Iterable[Order]) -> None:
        self._orders = tuple(orders)

    def fail_next(self, times: int = 1) -> None:
        self._failures_pending += times

    def list_orders(self) -> Lazy[Sequence[Order], LoadFailure]:
        return L.catching_async(self._fetch, on_error=LoadFailure.from_exception)

    async def _fetch(self) -> tuple[Order, ...]:
        self.calls += 1
        if self._latency:
            await asyncio.sleep(self._latency)
        if self._failures_pending:
            self._failures_pending -= 1
            raise LoadFailureError(
                LoadFailure(LoadFailureKind.TRANSPORT, "order service unavailable")
            )
        return self._orders


__all__ = ("MemorySource",)
