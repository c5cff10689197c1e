"""
Diagnostics sinks — where load failures are recorded.

Both sinks satisfy orderview.store.DiagnosticsSink.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orderview.store._types import LoadFailure


class LoggingSink:
    """
    Record failures on a logger at ERROR, with the cause's traceback.

    Example:
        store = OrderStore(source, diagnostics=LoggingSink(logging.getLogger("orders.ui")))
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def record(self, failure: LoadFailure) -> None:
        cause = failure.cause
        exc_info = (type(cause), cause, cause.__traceback__) if cause is not None else None
        self._logger.error(
            "Failed to load orders [%s]: %s", failure.kind.name, failure.message, exc_info=exc_info
        )


@dataclass(slots=True)
class MemorySink:
    """Keep failures in memory, newest last."""

    failures: list[LoadFailure] = field(default_factory=list)

    def record(self, failure: LoadFailure) -> None:
        self.failures.append(failure)

    @property
    def last(self) -> LoadFailure | None:
        return self.failures[-1] if self.failures else None

    def clear(self) -> None:
        self.failures.clear()


__all__ = ("LoggingSink", "MemorySink")
