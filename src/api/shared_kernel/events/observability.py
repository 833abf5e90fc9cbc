"""Observability probes for domain event dispatch.

Following Domain Oriented Observability, probes capture domain-significant
events without cluttering dispatch logic with logging concerns.
"""

from __future__ import annotations

from typing import Protocol

import structlog


logger = structlog.get_logger()


class EventDispatchProbe(Protocol):
    """Protocol for event dispatcher observability."""

    def listener_registered(self, event_type: str, listener: str, position: int) -> None:
        """Called when a listener is appended to an event type's list."""
        ...

    def event_dispatched(self, event_type: str, listener_count: int, mode: str) -> None:
        """Called when an event is handed to its listeners."""
        ...

    def listener_succeeded(self, event_type: str, listener: str) -> None:
        """Called when a listener handled an event without raising."""
        ...

    def listener_failed(self, event_type: str, listener: str, error: str) -> None:
        """Called when a listener raised; later listeners still run."""
        ...

    def background_tasks_drained(self, count: int) -> None:
        """Called when outstanding background deliveries were awaited."""
        ...


class DefaultEventDispatchProbe:
    """Default implementation using structlog."""

    def __init__(self) -> None:
        """Initialize the probe with a logger."""
        self._log = logger.bind(component="event_dispatcher")

    def listener_registered(self, event_type: str, listener: str, position: int) -> None:
        """Log listener registration."""
        self._log.debug(
            "event_listener_registered",
            event_type=event_type,
            listener=listener,
            position=position,
        )

    def event_dispatched(self, event_type: str, listener_count: int, mode: str) -> None:
        """Log event dispatch."""
        self._log.info(
            "domain_event_dispatched",
            event_type=event_type,
            listener_count=listener_count,
            mode=mode,
        )

    def listener_succeeded(self, event_type: str, listener: str) -> None:
        """Log listener success."""
        self._log.debug(
            "event_listener_succeeded",
            event_type=event_type,
            listener=listener,
        )

    def listener_failed(self, event_type: str, listener: str, error: str) -> None:
        """Log listener failure."""
        self._log.error(
            "event_listener_failed",
            event_type=event_type,
            listener=listener,
            error=error,
        )

    def background_tasks_drained(self, count: int) -> None:
        """Log drained background deliveries."""
        if count > 0:
            self._log.info("event_background_tasks_drained", count=count)
