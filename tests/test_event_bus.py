"""Tests for the EventBus and the reconciliation trigger."""
import asyncio

import pytest

from transfer_helpers import RecordingResync
from suiwallet_core import EventBus, EventType, ReconciliationTrigger, WalletEvent


@pytest.mark.asyncio
async def test_event_bus_subscribe_and_emit():
    bus = EventBus()
    received_events = []

    async def handler(event: WalletEvent):
        received_events.append(event)

    bus.subscribe("transfer.*", handler)

    await bus.emit(
        EventType.TRANSFER_SUBMITTED,
        data={"digest": "D1"},
        fire_and_forget=False,
    )

    assert len(received_events) == 1
    assert received_events[0].event_type == EventType.TRANSFER_SUBMITTED
    assert received_events[0].data["digest"] == "D1"


@pytest.mark.asyncio
async def test_wildcard_pattern_matching():
    bus = EventBus()
    transfer_events = []
    all_events = []

    bus.subscribe("transfer.*", transfer_events.append)
    bus.subscribe("*", all_events.append)

    await bus.emit(EventType.TRANSFER_FAILED, fire_and_forget=False)
    await bus.emit(EventType.OBJECTS_STALE, fire_and_forget=False)

    assert len(transfer_events) == 1
    assert len(all_events) == 2


@pytest.mark.asyncio
async def test_unsubscribe():
    bus = EventBus()
    events = []

    bus.subscribe("objects.stale", events.append)
    bus.unsubscribe("objects.stale", events.append)
    bus.unsubscribe("objects.stale", events.append)

    await bus.emit(EventType.OBJECTS_STALE, fire_and_forget=False)

    assert events == []


@pytest.mark.asyncio
async def test_duplicate_subscription_is_ignored():
    bus = EventBus()
    events = []

    bus.subscribe("*", events.append)
    bus.subscribe("*", events.append)
    await bus.emit(EventType.OBJECTS_STALE, fire_and_forget=False)

    assert len(events) == 1


@pytest.mark.asyncio
async def test_handler_failure_is_isolated(caplog):
    bus = EventBus()
    events = []

    def broken(event):
        raise ValueError("boom")

    bus.subscribe("*", broken)
    bus.subscribe("objects.*", events.append)

    await bus.emit(EventType.OBJECTS_STALE, fire_and_forget=False)

    assert len(events) == 1
    assert "boom" in caplog.text


@pytest.mark.asyncio
async def test_fire_and_forget_runs_in_background():
    bus = EventBus()
    started = asyncio.Event()

    async def handler(event):
        started.set()

    bus.subscribe("*", handler)
    await bus.emit(EventType.OBJECTS_STALE)

    assert bus.pending_tasks == 1
    await bus.wait_for_background_tasks(timeout=1)
    assert started.is_set()
    assert bus.pending_tasks == 0


@pytest.mark.asyncio
async def test_clear_subscribers():
    bus = EventBus()
    events = []
    bus.subscribe("*", events.append)

    bus.clear_subscribers()
    await bus.emit(EventType.OBJECTS_STALE, fire_and_forget=False)

    assert events == []


class TestReconciliationTrigger:
    @pytest.mark.asyncio
    async def test_notify_fires_resync(self):
        bus = EventBus()
        resync = RecordingResync()
        trigger = ReconciliationTrigger(bus, resync)

        await trigger.notify_transfer_completed("D1")
        await bus.wait_for_background_tasks(timeout=1)

        assert resync.calls == 1

    @pytest.mark.asyncio
    async def test_sync_resync_port(self):
        bus = EventBus()
        calls = []

        class SyncResync:
            def trigger_resync(self):
                calls.append(True)

        ReconciliationTrigger(bus, SyncResync())
        await bus.emit(EventType.OBJECTS_STALE, fire_and_forget=False)

        assert calls == [True]

    @pytest.mark.asyncio
    async def test_resync_failure_is_contained(self):
        bus = EventBus()
        resync = RecordingResync(error=RuntimeError("down"))
        trigger = ReconciliationTrigger(bus, resync)

        await trigger.notify_transfer_completed()
        await bus.wait_for_background_tasks(timeout=1)

        assert resync.calls == 1

    @pytest.mark.asyncio
    async def test_without_resync_port(self):
        bus = EventBus()
        events = []
        bus.subscribe("objects.stale", events.append)

        await ReconciliationTrigger(bus).notify_transfer_completed("D1")
        await bus.wait_for_background_tasks(timeout=1)

        assert events[0].data == {"digest": "D1"}

    @pytest.mark.asyncio
    async def test_close_unsubscribes(self):
        bus = EventBus()
        resync = RecordingResync()
        trigger = ReconciliationTrigger(bus, resync)

        trigger.close()
        await trigger.notify_transfer_completed()
        await bus.wait_for_background_tasks(timeout=1)

        assert resync.calls == 0
