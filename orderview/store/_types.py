"""
Store types — collaborators and failures.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

from combinators import lift as L

from orderview._types import Lazy
from orderview.domain import Order

# ═══════════════════════════════════════════════════════════════════════════════
# Load Failure
# ═══════════════════════════════════════════════════════════════════════════════


class LoadFailureKind(Enum):
    """Why a load failed."""

    TRANSPORT = auto()  # Request could not be made or was rejected
    TIMEOUT = auto()  # Transport gave up waiting
    MALFORMED = auto()  # Response was not a list of orders
    UNEXPECTED = auto()  # Anything else raised by the source


@dataclass(frozen=True, slots=True)
class LoadFailure:
    """
    A failed call to OrderSource.list_orders().

    Never shown to users: the store surfaces FAILED_TO_LOAD instead and
    hands this to the DiagnosticsSink.
    """

    kind: LoadFailureKind
    message: str
    cause: BaseException | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> LoadFailure:
        if isinstance(exc, LoadFailureError):
            return exc.failure
        return cls(LoadFailureKind.UNEXPECTED, f"{type(exc).__name__}: {exc}", exc)

    def __str__(self) -> str:
        return f"{self.kind.name}: {self.message}"


class LoadFailureError(Exception):
    """Raise from a plain async fetch to fail with a specific LoadFailure."""

    def __init__(self, failure: LoadFailure) -> None:
        super().__init__(str(failure))
        self.failure = failure


# ═══════════════════════════════════════════════════════════════════════════════
# Completion Policy
# ═══════════════════════════════════════════════════════════════════════════════


class CompletionPolicy(Enum):
    """
    Which of several in-flight loads decides the final state.

    LAST_ISSUED:   only the most recently issued load may apply; older
                   completions are discarded.
    LAST_RESOLVED: every completion applies in arrival order, so the load
                   that resolves last wins even if it was issued first.
    """

    LAST_ISSUED = "last_issued"
    LAST_RESOLVED = "last_resolved"


# ═══════════════════════════════════════════════════════════════════════════════
# Collaborator Protocols — Users Implement These
# ═══════════════════════════════════════════════════════════════════════════════


class OrderSource(Protocol):
    """
    Supplies the raw order collection.

    Calls must be idempotent and must not change order data.

    Example:
        class ApiSource:
            def list_orders(self) -> Lazy[Sequence[Order], LoadFailure]:
                return L.catching_async(self._get, on_error=LoadFailure.from_exception)
    """

    def list_orders(self) -> Lazy[Sequence[Order], LoadFailure]:
        """Fetch every order. Lazy: nothing happens until awaited."""
        ...


class DiagnosticsSink(Protocol):
    """Fire-and-forget recorder for load failures. Must not raise or block."""

    def record(self, failure: LoadFailure) -> None:
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# source_from() — Adapt a Plain Async Function
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class FunctionSource:
    """OrderSource backed by an async function; exceptions become LoadFailure."""

    fetch: Callable[[], Awaitable[Sequence[Order]]]

    def list_orders(self) -> Lazy[Sequence[Order], LoadFailure]:
        return L.catching_async(self.fetch, on_error=LoadFailure.from_exception)


def source_from(fetch: Callable[[], Awaitable[Sequence[Order]]]) -> FunctionSource:
    """
    Create an OrderSource from an async function.

    Example:
        async def fetch() -> list[Order]:
            return await api.orders()

        store = OrderStore(source_from(fetch))
    """
    return FunctionSource(fetch)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "LoadFailureKind",
    "LoadFailure",
    "LoadFailureError",
    "CompletionPolicy",
    "OrderSource",
    "DiagnosticsSink",
    "FunctionSource",
    "source_from",
)
