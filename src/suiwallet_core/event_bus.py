"""Event bus for wallet transfer events.

Decouples event producers (the transfer service) from event consumers
(object resync, activity feeds, notifications).
"""
from __future__ import annotations

import asyncio
import fnmatch
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Wallet event types."""

    TRANSFER_SUBMITTED = "transfer.submitted"
    TRANSFER_FAILED = "transfer.failed"
    OBJECTS_STALE = "objects.stale"


@dataclass
class WalletEvent:
    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    event_id: str = field(default_factory=lambda: f"evt_{uuid.uuid4().hex[:16]}")
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class EventBus:
    """Central event bus for wallet events.

    Example:
        bus = EventBus()

        # Subscribe to all transfer events
        bus.subscribe("transfer.*", my_handler)

        # Emit event
        await bus.emit(EventType.TRANSFER_SUBMITTED, data={"digest": "..."})
    """

    _subscribers: dict[str, list[Callable]] = field(default_factory=dict)
    _background_tasks: set[asyncio.Task[Any]] = field(default_factory=set)

    def subscribe(self, event_pattern: str, handler: Callable) -> None:
        """Subscribe to events matching a pattern.

        Args:
            event_pattern: Event type or pattern (supports wildcards like 'transfer.*')
            handler: Sync or async callable that receives (event: WalletEvent)
        """
        handlers = self._subscribers.setdefault(event_pattern, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Subscribed {_handler_name(handler)} to {event_pattern}")

    def unsubscribe(self, event_pattern: str, handler: Callable) -> None:
        """Remove a subscription."""
        if event_pattern in self._subscribers:
            try:
                self._subscribers[event_pattern].remove(handler)
                logger.debug(f"Unsubscribed {_handler_name(handler)} from {event_pattern}")
            except ValueError:
                pass

            if not self._subscribers[event_pattern]:
                del self._subscribers[event_pattern]

    async def emit(
        self,
        event_type: EventType,
        data: Optional[dict] = None,
        fire_and_forget: bool = True,
    ) -> WalletEvent:
        """Emit an event to all matching subscribers.

        Args:
            event_type: Type of event to emit
            data: Event payload data
            fire_and_forget: If True, run handlers in a background task (default)

        Returns:
            The emitted event
        """
        event = WalletEvent(event_type=event_type, data=dict(data or {}))

        matching_handlers = []
        for pattern, handlers in self._subscribers.items():
            if self._matches_pattern(event_type.value, pattern):
                matching_handlers.extend(handlers)

        if matching_handlers:
            if fire_and_forget:
                self._schedule_background(self._execute_handlers(event, matching_handlers))
            else:
                await self._execute_handlers(event, matching_handlers)

        logger.debug(f"Emitted {event_type.value} to {len(matching_handlers)} handlers")
        return event

    async def _execute_handlers(
        self,
        event: WalletEvent,
        handlers: list[Callable],
    ) -> None:
        """Execute all handlers for an event; failures are logged, not raised."""
        for handler in handlers:
            try:
                result = handler(event)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.error(
                    f"Handler {_handler_name(handler)} failed for {event.event_type.value}: {e}",
                    exc_info=True,
                )

    def _schedule_background(self, coro: Any) -> None:
        """Schedule a background coroutine while tracking task lifecycle."""
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._on_background_task_done)

    def _on_background_task_done(self, task: asyncio.Task[Any]) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        try:
            task.result()
        except Exception:
            logger.exception("Event bus background task failed")

    @property
    def pending_tasks(self) -> int:
        return len(self._background_tasks)

    async def wait_for_background_tasks(self, timeout: Optional[float] = None) -> None:
        """Wait for all currently tracked background tasks to complete."""
        if not self._background_tasks:
            return
        pending = list(self._background_tasks)
        await asyncio.wait_for(asyncio.gather(*pending, return_exceptions=True), timeout=timeout)

    def _matches_pattern(self, event_type: str, pattern: str) -> bool:
        """Check if event type matches subscription pattern (wildcard support).

        Examples:
            _matches_pattern("transfer.failed", "transfer.*") -> True
            _matches_pattern("objects.stale", "transfer.*") -> False
            _matches_pattern("objects.stale", "*") -> True
        """
        return fnmatch.fnmatch(event_type, pattern)

    def clear_subscribers(self) -> None:
        """Clear all subscriptions (useful for testing)."""
        self._subscribers.clear()
        logger.debug("Cleared all event subscriptions")


def _handler_name(handler: Callable) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)
