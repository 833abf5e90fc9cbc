"""In-process domain event delivery shared by all bounded contexts."""

from shared_kernel.events.dispatcher import EventDispatcher
from shared_kernel.events.observability import (
    DefaultEventDispatchProbe,
    EventDispatchProbe,
)
from shared_kernel.events.ports import DispatchMode, EventListener
from shared_kernel.events.registry import ListenerRegistry, listener_name

__all__ = [
    "DefaultEventDispatchProbe",
    "DispatchMode",
    "EventDispatchProbe",
    "EventDispatcher",
    "EventListener",
    "ListenerRegistry",
    "listener_name",
]
