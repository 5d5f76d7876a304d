"""Signals the owned-object sync collaborator that local coin state is stale."""
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Optional, Protocol, Union

from .event_bus import EventBus, EventType, WalletEvent

logger = logging.getLogger(__name__)


class ObjectResyncPort(Protocol):
    def trigger_resync(self) -> Union[None, Awaitable[Any]]: ...


class ReconciliationTrigger:
    """Fire-and-forget bridge from completed transfers to object resync.

    The resync runs as an event bus background task, so its outcome never
    reaches the submission that caused it.
    """

    def __init__(self, bus: EventBus, resync: Optional[ObjectResyncPort] = None) -> None:
        self._bus = bus
        self._resync = resync
        if resync is not None:
            bus.subscribe(EventType.OBJECTS_STALE.value, self._on_objects_stale)

    async def notify_transfer_completed(self, digest: Optional[str] = None) -> None:
        data = {"digest": digest} if digest else {}
        await self._bus.emit(EventType.OBJECTS_STALE, data=data, fire_and_forget=True)

    async def _on_objects_stale(self, event: WalletEvent) -> None:
        logger.debug(f"Resyncing owned objects after {event.data.get('digest', 'transfer')}")
        result = self._resync.trigger_resync()
        if inspect.isawaitable(result):
            await result

    def close(self) -> None:
        if self._resync is not None:
            self._bus.unsubscribe(EventType.OBJECTS_STALE.value, self._on_objects_stale)
