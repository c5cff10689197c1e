"""
Load state — the store's fetch lifecycle.

Lifecycle:
    Idle ──refresh()──► Loading ──success──► Ready(orders)
                                └──failure──► Failed(message)
    Ready / Failed ──refresh()──► Loading
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from orderview.domain._types import Order

if TYPE_CHECKING:
    from orderview.store._types import LoadFailure

FAILED_TO_LOAD = "Failed to load orders"
"""The only message a failed load ever shows."""


@dataclass(frozen=True, slots=True)
class Idle:
    """Nothing has been requested yet."""


@dataclass(frozen=True, slots=True)
class Loading:
    """A load is in flight."""


@dataclass(frozen=True, slots=True)
class Ready:
    """The most recent applied load succeeded."""

    orders: tuple[Order, ...]


@dataclass(frozen=True, slots=True)
class Failed:
    """
    The most recent applied load failed.

    message is always FAILED_TO_LOAD; failure keeps the underlying
    cause for diagnostics and is excluded from equality.
    """

    message: str = FAILED_TO_LOAD
    failure: LoadFailure | None = field(default=None, compare=False)


type LoadState = Idle | Loading | Ready | Failed


__all__ = (
    "FAILED_TO_LOAD",
    "Idle",
    "Loading",
    "Ready",
    "Failed",
    "LoadState",
)
