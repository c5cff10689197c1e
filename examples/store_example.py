"""
Store — load lifecycle with explicit completion policy.

Key concepts:
- Idle → Loading → Ready | Failed; Failed always says "Failed to load orders"
- Failure details go to the DiagnosticsSink, not to the display
- Overlapping loads: LAST_ISSUED (default) drops stale completions,
  LAST_RESOLVED lets whichever finishes last win

Level 4: orderview.store
Level 3: combinators.flow
Level 2: kungfu.Result
"""

import asyncio

from orderview.config import configure_logging
from orderview.diagnostics import MemorySink
from orderview.source import MemorySource
from orderview.store import CompletionPolicy, OrderStore
from orderview.view import view_of
from examples._infra import SAMPLE_ORDERS, banner, print_view, run


class SlowThenFastSource(MemorySource):
    """First call is slow and returns old data; later calls are fast."""

    def __init__(self) -> None:
        super().__init__(SAMPLE_ORDERS[3:])
        self._first = True

    async def _fetch(self):
        if self._first:
            self._first = False
            await asyncio.sleep(0.05)
            return SAMPLE_ORDERS[:1]
        return await super()._fetch()


async def overlapping(policy: CompletionPolicy) -> None:
    store = OrderStore(SlowThenFastSource(), policy=policy)
    slow = store.refresh()
    fast = store.refresh()
    await asyncio.gather(slow, fast)
    ids = [order.id for order in store.orders]
    print(f"  {policy.name:13} → final orders {ids}")


async def main() -> None:
    configure_logging("INFO")

    banner("1. Subscribe: first observation loads")
    source = MemorySource(SAMPLE_ORDERS, latency=0.01)
    sink = MemorySink()
    store = OrderStore(source, diagnostics=sink)

    unsubscribe = store.subscribe(lambda state: print(f"  state → {type(state).__name__}"))
    await asyncio.sleep(0.05)
    print_view(view_of(store))

    banner("2. Failure keeps the last list and records diagnostics")
    source.fail_next()
    await store.load()
    print_view(view_of(store))
    print(f"\n  sink: {sink.last}")

    banner("3. Invalidate after a mutation elsewhere")
    source.replace(SAMPLE_ORDERS[:2])
    await store.invalidate("order 5 refunded")
    print_view(view_of(store))
    unsubscribe()

    banner("4. Overlapping refreshes")
    await overlapping(CompletionPolicy.LAST_ISSUED)
    await overlapping(CompletionPolicy.LAST_RESOLVED)


if __name__ == "__main__":
    run(main)
