"""In-process domain event dispatcher.

Hands committed domain events to their registered listeners, either inline
or in background tasks, isolating every listener call in its own fault
boundary.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from typing import Any

from shared_kernel.events.observability import (
    DefaultEventDispatchProbe,
    EventDispatchProbe,
)
from shared_kernel.events.ports import DispatchMode, EventListener
from shared_kernel.events.registry import ListenerRegistry, listener_name


def _always_sync(event_type: str) -> DispatchMode:
    return DispatchMode.SYNC


class EventDispatcher:
    """Delivers domain events to listeners in registration order.

    Dispatch is fire-and-forget from the caller's perspective: a failing
    listener is logged and skipped, and never raises back into the code
    that produced the event. Events should be dispatched only after the
    transaction that produced them has committed.

    Background (ASYNC) deliveries are tracked so they can be awaited with
    drain() on shutdown.
    """

    def __init__(
        self,
        registry: ListenerRegistry,
        mode_for: Callable[[str], DispatchMode] | None = None,
        probe: EventDispatchProbe | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Static event-to-listener table
            mode_for: Resolves the dispatch mode for an event type name
                (defaults to SYNC for every type)
            probe: Optional observability probe
        """
        self._registry = registry
        self._mode_for = mode_for or _always_sync
        self._probe = probe or DefaultEventDispatchProbe()
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending_tasks(self) -> int:
        """Number of background deliveries still running."""
        return len(self._tasks)

    async def dispatch(self, events: Iterable[Any]) -> None:
        """Dispatch events in order.

        Args:
            events: Domain events collected from a committed mutation
        """
        for event in events:
            await self.dispatch_one(event)

    async def dispatch_one(self, event: Any) -> None:
        """Dispatch a single event according to its type's mode."""
        event_type = type(event).__name__
        listeners = self._registry.listeners_for(type(event))
        mode = self._mode_for(event_type)

        self._probe.event_dispatched(
            event_type=event_type,
            listener_count=len(listeners),
            mode=mode.value,
        )

        if not listeners:
            return

        if mode is DispatchMode.ASYNC:
            task = asyncio.create_task(self._deliver(event, listeners))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            return

        await self._deliver(event, listeners)

    async def drain(self) -> None:
        """Wait for all outstanding background deliveries to finish."""
        tasks = list(self._tasks)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._probe.background_tasks_drained(len(tasks))

    async def _deliver(
        self,
        event: Any,
        listeners: tuple[EventListener, ...],
    ) -> None:
        """Invoke each listener in order, each in its own fault boundary."""
        event_type = type(event).__name__
        for listener in listeners:
            name = listener_name(listener)
            try:
                await listener.handle(event)
            except Exception as e:
                self._probe.listener_failed(
                    event_type=event_type,
                    listener=name,
                    error=repr(e),
                )
                continue
            self._probe.listener_succeeded(event_type=event_type, listener=name)
