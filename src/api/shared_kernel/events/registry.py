"""Static event-to-listener registration table."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from shared_kernel.events.ports import EventListener

if TYPE_CHECKING:
    from shared_kernel.events.observability import EventDispatchProbe


class ListenerRegistry:
    """Ordered mapping from event type to the listeners that handle it.

    Listeners for one event type are invoked in the order they were
    registered. Registration order is part of the contract, so listeners
    are kept in tuples rather than sets.
    """

    def __init__(self, probe: "EventDispatchProbe | None" = None) -> None:
        """Initialize with an empty table.

        Args:
            probe: Optional observability probe for logging registrations
        """
        self._listeners: dict[type, tuple[EventListener, ...]] = {}
        self._probe = probe

    @classmethod
    def from_table(
        cls,
        table: Mapping[type, Iterable[EventListener]],
        probe: "EventDispatchProbe | None" = None,
    ) -> "ListenerRegistry":
        """Build a registry from a static {event type: listeners} table."""
        registry = cls(probe=probe)
        for event_type, listeners in table.items():
            for listener in listeners:
                registry.register(event_type, listener)
        return registry

    def register(self, event_type: type, listener: EventListener) -> None:
        """Append a listener to the end of an event type's list.

        Args:
            event_type: The event class the listener handles
            listener: The listener to register
        """
        self._listeners[event_type] = (*self._listeners.get(event_type, ()), listener)

        if self._probe is not None:
            self._probe.listener_registered(
                event_type=event_type.__name__,
                listener=listener_name(listener),
                position=len(self._listeners[event_type]),
            )

    def listeners_for(self, event_type: type) -> tuple[EventListener, ...]:
        """Return the listeners for an event type in registration order.

        Unknown event types have no listeners.
        """
        return self._listeners.get(event_type, ())

    def registered_event_types(self) -> frozenset[str]:
        """Return the names of all event types with at least one listener."""
        return frozenset(event_type.__name__ for event_type in self._listeners)


def listener_name(listener: EventListener) -> str:
    """Name used for a listener in logs."""
    return getattr(listener, "name", type(listener).__name__)
