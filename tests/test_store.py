"""OrderStore load lifecycle, completion policies and diagnostics."""

from __future__ import annotations

import asyncio
import logging

import pytest
from kungfu import Error, LazyCoroResult

from orderview.diagnostics import MemorySink
from orderview.domain import FAILED_TO_LOAD, Failed, Idle, Loading, Ready
from orderview.source import MemorySource
from orderview.store import (
    CompletionPolicy,
    LoadFailure,
    LoadFailureError,
    LoadFailureKind,
    OrderStore,
    source_from,
)
from tests.factories import ALICE, BOB, GatedSource, settle


# ═══════════════════════════════════════════════════════════════════════════════
# Basic lifecycle
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_starts_idle_and_reading_state_does_not_load(scenario_orders, sink):
    source = MemorySource(scenario_orders)
    store = OrderStore(source, diagnostics=sink)

    assert store.current_state() == Idle()
    await asyncio.sleep(0)

    assert store.current_state() == Idle()
    assert source.calls == 0
    assert store.orders == ()


@pytest.mark.asyncio
async def test_successful_load_is_ready(scenario_orders, sink):
    store = OrderStore(MemorySource(scenario_orders), diagnostics=sink)

    state = await store.load()

    assert state == Ready((ALICE, BOB))
    assert store.current_state() == state
    assert store.orders == (ALICE, BOB)
    assert sink.failures == []


@pytest.mark.asyncio
async def test_refresh_moves_to_loading_immediately(scenario_orders, sink):
    store = OrderStore(MemorySource(scenario_orders), diagnostics=sink)

    task = store.refresh()
    assert store.current_state() == Loading()
    assert store.in_flight == 1

    await task
    await settle(store)
    assert store.in_flight == 0


@pytest.mark.asyncio
async def test_failed_load_shows_static_message_and_records_once(scenario_orders, sink):
    source = MemorySource(scenario_orders)
    source.fail_next()
    store = OrderStore(source, diagnostics=sink)

    state = await store.load()

    assert state == Failed(FAILED_TO_LOAD)
    match state:
        case Failed(message, failure):
            assert message == "Failed to load orders"
            assert failure is not None
            assert failure.kind is LoadFailureKind.TRANSPORT
    assert len(sink.failures) == 1
    assert sink.last.message == "order service unavailable"


@pytest.mark.asyncio
async def test_success_after_failure_is_ready(scenario_orders, sink):
    source = MemorySource(scenario_orders)
    source.fail_next()
    store = OrderStore(source, diagnostics=sink)

    assert isinstance(await store.load(), Failed)
    assert await store.load() == Ready((ALICE, BOB))
    assert len(sink.failures) == 1


@pytest.mark.asyncio
async def test_orders_kept_while_loading_and_after_failure(scenario_orders, sink):
    source = MemorySource(scenario_orders)
    store = OrderStore(source, diagnostics=sink)
    await store.load()

    source.fail_next()
    task = store.refresh()
    assert store.current_state() == Loading()
    assert store.orders == (ALICE, BOB)

    await task
    assert isinstance(store.current_state(), Failed)
    assert store.orders == (ALICE, BOB)


@pytest.mark.asyncio
async def test_replaced_orders_are_picked_up_on_refresh(sink):
    source = MemorySource([ALICE])
    store = OrderStore(source, diagnostics=sink)
    await store.load()

    source.replace([ALICE, BOB])
    assert await store.load() == Ready((ALICE, BOB))


def test_refresh_needs_a_running_loop(scenario_orders, sink):
    store = OrderStore(MemorySource(scenario_orders), diagnostics=sink)

    with pytest.raises(RuntimeError):
        store.refresh()
    assert store.current_state() == Idle()


# ═══════════════════════════════════════════════════════════════════════════════
# Mount, subscribe, invalidate
# ═══════════════════════════════════════════════════════════════════════════════


def test_observing_without_a_loop_keeps_the_first_load_pending(scenario_orders, sink):
    source = MemorySource(scenario_orders)
    store = OrderStore(source, diagnostics=sink)
    seen = []

    with pytest.raises(RuntimeError):
        store.subscribe(seen.append)
    with pytest.raises(RuntimeError):
        store.mount()
    assert store.current_state() == Idle()

    async def observe_later():
        store.mount()
        await settle(store)

    asyncio.run(observe_later())

    assert store.current_state() == Ready((ALICE, BOB))
    assert source.calls == 1
    assert seen == []


@pytest.mark.asyncio
async def test_mount_loads_once(scenario_orders, sink):
    source = MemorySource(scenario_orders)
    store = OrderStore(source, diagnostics=sink)

    assert store.mount() == Loading()
    store.mount()
    await settle(store)
    store.mount()
    await settle(store)

    assert source.calls == 1
    assert store.current_state() == Ready((ALICE, BOB))


@pytest.mark.asyncio
async def test_mount_after_explicit_refresh_does_not_reload(scenario_orders, sink):
    source = MemorySource(scenario_orders)
    store = OrderStore(source, diagnostics=sink)

    await store.load()
    store.mount()
    await settle(store)

    assert source.calls == 1


@pytest.mark.asyncio
async def test_subscribe_triggers_first_load_and_sees_transitions(scenario_orders, sink):
    store = OrderStore(MemorySource(scenario_orders), diagnostics=sink)
    seen = []

    unsubscribe = store.subscribe(seen.append)
    await settle(store)

    assert seen == [Loading(), Ready((ALICE, BOB))]

    unsubscribe()
    await store.load()
    assert len(seen) == 2


@pytest.mark.asyncio
async def test_second_subscriber_does_not_reload(scenario_orders, sink):
    source = MemorySource(scenario_orders)
    store = OrderStore(source, diagnostics=sink)

    store.subscribe(lambda state: None)
    store.subscribe(lambda state: None)
    await settle(store)

    assert source.calls == 1


@pytest.mark.asyncio
async def test_raising_listener_is_isolated(scenario_orders, sink, caplog):
    store = OrderStore(MemorySource(scenario_orders), diagnostics=sink)
    seen = []

    def broken(state):
        raise RuntimeError("render failed")

    store.subscribe(broken)
    store.subscribe(seen.append)

    with caplog.at_level(logging.ERROR, logger="orderview.store._store"):
        await settle(store)

    assert store.current_state() == Ready((ALICE, BOB))
    assert seen[-1] == Ready((ALICE, BOB))
    assert "State listener" in caplog.text


@pytest.mark.asyncio
async def test_invalidate_refreshes(scenario_orders, sink, caplog):
    source = MemorySource(scenario_orders)
    store = OrderStore(source, diagnostics=sink)
    await store.load()

    with caplog.at_level(logging.INFO, logger="orderview.store._store"):
        state = await store.invalidate("order 2 shipped")

    assert state == Ready((ALICE, BOB))
    assert source.calls == 2
    assert "order 2 shipped" in caplog.text


# ═══════════════════════════════════════════════════════════════════════════════
# Overlapping loads
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_last_issued_ignores_stale_completion(gated, sink):
    store = OrderStore(gated, diagnostics=sink)
    assert store.policy is CompletionPolicy.LAST_ISSUED

    first = store.refresh()
    second = store.refresh()
    await gated.started(2)
    assert store.in_flight == 2

    gated.resolve(1, [BOB])
    assert await second == Ready((BOB,))

    gated.resolve(0, [ALICE])
    await first
    assert store.current_state() == Ready((BOB,))
    assert store.orders == (BOB,)


@pytest.mark.asyncio
async def test_last_issued_waits_for_latest_when_older_resolves_first(gated, sink):
    store = OrderStore(gated, diagnostics=sink)

    first = store.refresh()
    second = store.refresh()
    await gated.started(2)

    gated.resolve(0, [ALICE])
    assert await first == Loading()
    assert store.orders == ()

    gated.resolve(1, [BOB])
    assert await second == Ready((BOB,))


@pytest.mark.asyncio
async def test_last_issued_stale_failure_is_recorded_but_not_applied(gated, sink):
    store = OrderStore(gated, diagnostics=sink)

    first = store.refresh()
    second = store.refresh()
    await gated.started(2)

    gated.resolve(1, [BOB])
    await second
    gated.fail(0, ConnectionError("reset by peer"))
    await first

    assert store.current_state() == Ready((BOB,))
    assert len(sink.failures) == 1
    assert sink.last.kind is LoadFailureKind.UNEXPECTED


@pytest.mark.asyncio
async def test_last_resolved_applies_in_arrival_order(gated, sink):
    store = OrderStore(gated, diagnostics=sink, policy=CompletionPolicy.LAST_RESOLVED)

    first = store.refresh()
    second = store.refresh()
    await gated.started(2)

    gated.resolve(1, [BOB])
    assert await second == Ready((BOB,))

    gated.resolve(0, [ALICE])
    assert await first == Ready((ALICE,))
    assert store.orders == (ALICE,)


# ═══════════════════════════════════════════════════════════════════════════════
# Misbehaving collaborators
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_raising_fetch_becomes_unexpected_failure(sink):
    async def fetch():
        raise RuntimeError("boom")

    store = OrderStore(source_from(fetch), diagnostics=sink)

    assert await store.load() == Failed()
    assert sink.last.kind is LoadFailureKind.UNEXPECTED
    assert sink.last.message == "RuntimeError: boom"
    assert isinstance(sink.last.cause, RuntimeError)


@pytest.mark.asyncio
async def test_load_failure_error_keeps_its_kind(sink):
    async def fetch():
        raise LoadFailureError(LoadFailure(LoadFailureKind.TIMEOUT, "gave up"))

    store = OrderStore(source_from(fetch), diagnostics=sink)
    await store.load()

    assert sink.last == LoadFailure(LoadFailureKind.TIMEOUT, "gave up")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", ["not orders", [ALICE, "oops"], {"orders": []}, None])
async def test_malformed_payload_fails(payload, sink):
    async def fetch():
        return payload

    store = OrderStore(source_from(fetch), diagnostics=sink)

    assert isinstance(await store.load(), Failed)
    assert sink.last.kind is LoadFailureKind.MALFORMED


@pytest.mark.asyncio
async def test_source_error_value_is_wrapped(sink):
    class OddSource:
        def list_orders(self):
            async def run():
                return Error("service said no")

            return LazyCoroResult(run)

    store = OrderStore(OddSource(), diagnostics=sink)

    assert isinstance(await store.load(), Failed)
    assert sink.last == LoadFailure(LoadFailureKind.UNEXPECTED, "service said no")


@pytest.mark.asyncio
async def test_raising_sink_does_not_break_the_store(scenario_orders, caplog):
    class BrokenSink:
        def record(self, failure):
            raise OSError("disk full")

    source = MemorySource(scenario_orders)
    source.fail_next()
    store = OrderStore(source, diagnostics=BrokenSink())

    with caplog.at_level(logging.ERROR, logger="orderview.store._store"):
        assert await store.load() == Failed()

    assert "Diagnostics sink raised" in caplog.text
    assert await store.load() == Ready((ALICE, BOB))


@pytest.mark.asyncio
async def test_default_sink_logs_failures(scenario_orders, caplog):
    source = MemorySource(scenario_orders)
    source.fail_next()
    store = OrderStore(source)

    with caplog.at_level(logging.ERROR, logger="orderview.diagnostics"):
        await store.load()

    assert "Failed to load orders [TRANSPORT]" in caplog.text


def test_memory_sink_clear():
    sink = MemorySink()
    sink.record(LoadFailure(LoadFailureKind.TIMEOUT, "slow"))
    assert sink.last is not None

    sink.clear()
    assert sink.last is None
