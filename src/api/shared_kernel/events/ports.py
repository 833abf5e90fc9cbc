"""Protocols (ports) for in-process domain event delivery.

Bounded contexts provide listeners; the shared kernel only knows how to
route an event to the listeners registered for its type.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Protocol, runtime_checkable


class DispatchMode(StrEnum):
    """How an event is handed to its listeners.

    SYNC listeners are awaited before dispatch returns. ASYNC listeners run
    in a background task owned by the dispatcher.
    """

    SYNC = "sync"
    ASYNC = "async"


@runtime_checkable
class EventListener(Protocol):
    """Reacts to a single domain event.

    Listeners are stateless and must tolerate duplicate delivery. A raised
    exception is contained by the dispatcher and never reaches the code
    that produced the event.
    """

    async def handle(self, event: Any) -> None:
        """Perform the listener's side effect for the event."""
        ...
