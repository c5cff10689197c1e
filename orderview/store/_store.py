"""
OrderStore — load lifecycle for the order collection.

Note: Loads run as asyncio tasks on the caller's loop. Nothing is
cancelled and nothing times out here; CompletionPolicy decides which
completion wins when loads overlap.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from kungfu import Result, Ok, Error, LazyCoroResult
from combinators import flow, lift as L

from orderview.domain import (
    Order,
    Idle,
    Loading,
    Ready,
    Failed,
    LoadState,
)
from orderview.diagnostics import LoggingSink
from orderview.store._types import (
    CompletionPolicy,
    DiagnosticsSink,
    LoadFailure,
    LoadFailureError,
    LoadFailureKind,
    OrderSource,
)

logger = logging.getLogger(__name__)

type Listener = Callable[[LoadState], None]
type Unsubscribe = Callable[[], None]


# ═══════════════════════════════════════════════════════════════════════════════
# Payload Checks
# ═══════════════════════════════════════════════════════════════════════════════


def _malformed(message: str) -> LoadFailureError:
    return LoadFailureError(LoadFailure(LoadFailureKind.MALFORMED, message))


def _as_orders(payload: object) -> tuple[Order, ...]:
    """Freeze a source payload, rejecting anything that is not orders."""
    if isinstance(payload, (str, bytes)) or not isinstance(payload, Sequence):
        raise _malformed(f"expected a sequence of orders, got {type(payload).__name__}")
    orders = tuple(payload)
    for item in orders:
        if not isinstance(item, Order):
            raise _malformed(f"expected Order, got {type(item).__name__}")
    return orders


def _as_failure(error: object) -> LoadFailure:
    if isinstance(error, LoadFailure):
        return error
    return LoadFailure(LoadFailureKind.UNEXPECTED, str(error))


# ═══════════════════════════════════════════════════════════════════════════════
# OrderStore
# ═══════════════════════════════════════════════════════════════════════════════


class OrderStore:
    """
    Authoritative in-memory order list plus its load state machine.

    refresh(), mount(), invalidate() and subscribe() schedule tasks and
    must be called from a running event loop.

    Example:
        store = OrderStore(HttpSource(config), diagnostics=LoggingSink())
        unsubscribe = store.subscribe(render)   # first observation loads

        store.refresh()                          # user clicked "Refresh"

        match store.current_state():
            case Ready(orders):
                result = query(orders, criteria)
            case Failed(message):
                show_error(message)
    """

    def __init__(
        self,
        source: OrderSource,
        *,
        diagnostics: DiagnosticsSink | None = None,
        policy: CompletionPolicy = CompletionPolicy.LAST_ISSUED,
    ) -> None:
        self._source = source
        self._diagnostics = diagnostics if diagnostics is not None else LoggingSink()
        self._policy = policy

        self._state: LoadState = Idle()
        self._orders: tuple[Order, ...] = ()
        self._issued = 0
        self._mounted = False
        self._tasks: set[asyncio.Task[LoadState]] = set()
        self._listeners: list[Listener] = []

    # ─────────────────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────────────────

    def current_state(self) -> LoadState:
        """Current state snapshot. No side effects."""
        return self._state

    @property
    def orders(self) -> tuple[Order, ...]:
        """Orders of the last applied success; kept through later Loading/Failed."""
        return self._orders

    @property
    def in_flight(self) -> int:
        """Loads issued but not yet resolved."""
        return len(self._tasks)

    @property
    def policy(self) -> CompletionPolicy:
        return self._policy

    # ─────────────────────────────────────────────────────────────────────────
    # Triggers
    # ─────────────────────────────────────────────────────────────────────────

    def mount(self) -> LoadState:
        """
        Perform the implicit first load.

        Only the first call on an Idle store loads; later calls (or calls
        after an explicit refresh) just return the current state. Nothing
        changes if no event loop is running, so a later call still loads.
        """
        if not self._mounted and isinstance(self._state, Idle):
            self.refresh()
        return self._state

    def refresh(self) -> asyncio.Task[LoadState]:
        """
        Start a new load and move to Loading.

        Always legal, including while other loads are in flight. The
        returned task resolves to the store state right after this load's
        completion was processed (which, for a discarded stale load, may
        still be Loading).
        """
        loop = asyncio.get_running_loop()
        self._mounted = True
        self._issued += 1
        seq = self._issued

        self._transition(Loading())
        task = loop.create_task(self._run(seq), name=f"orderview-load-{seq}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        logger.debug("Issued load #%d (%d in flight)", seq, len(self._tasks))
        return task

    async def load(self) -> LoadState:
        """Issue a refresh and wait for it."""
        return await self.refresh()

    def invalidate(self, reason: str) -> asyncio.Task[LoadState]:
        """Explicit "data may be stale" signal, e.g. after a mutation elsewhere."""
        logger.info("Orders invalidated: %s", reason)
        return self.refresh()

    # ─────────────────────────────────────────────────────────────────────────
    # Observation
    # ─────────────────────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """
        Call listener(state) on every state change.

        Subscribing observes the store, so the first subscription on an
        Idle store triggers the implicit load. Outside a running event
        loop this raises RuntimeError and registers nothing.
        """
        asyncio.get_running_loop()
        self._listeners.append(listener)
        self.mount()

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _fetch(self) -> LazyCoroResult[tuple[Order, ...], LoadFailure]:
        source = self._source

        async def attempt() -> tuple[Order, ...]:
            match await source.list_orders():
                case Ok(payload):
                    return _as_orders(payload)
                case Error(error):
                    raise LoadFailureError(_as_failure(error))

        return (
            flow(L.catching_async(attempt, on_error=LoadFailure.from_exception))
            .tap_err(self._record)
            .compile()
        )

    async def _run(self, seq: int) -> LoadState:
        result = await self._fetch()
        self._complete(seq, result)
        return self._state

    def _complete(self, seq: int, result: Result[tuple[Order, ...], LoadFailure]) -> None:
        if self._policy is CompletionPolicy.LAST_ISSUED and seq != self._issued:
            logger.debug("Discarded stale load #%d (latest is #%d)", seq, self._issued)
            return

        match result:
            case Ok(orders):
                logger.debug("Applied load #%d: %d orders", seq, len(orders))
                self._orders = orders
                self._transition(Ready(orders))
            case Error(failure):
                logger.debug("Applied load #%d: failed", seq)
                self._transition(Failed(failure=failure))

    def _record(self, failure: LoadFailure) -> None:
        logger.warning("Order load failed: %s", failure)
        try:
            self._diagnostics.record(failure)
        except Exception:
            logger.exception("Diagnostics sink raised while recording %s", failure.kind.name)

    def _transition(self, state: LoadState) -> None:
        changed = state != self._state
        self._state = state
        if not changed:
            return
        for listener in tuple(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r raised", listener)


__all__ = ("OrderStore", "Listener", "Unsubscribe")
