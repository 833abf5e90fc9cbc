"""Domain events for IAM bounded context.

Domain events capture facts about things that have happened in the domain.
They are immutable value objects that carry all the information needed
to describe the occurrence of an event.

Events are dispatched to in-process listeners after the transaction that
produced them has committed.
"""

from iam.domain.events.auth import (
    UserLoggedIn,
    UserLoggedOut,
    UserRegistered,
    UserTokenRefreshed,
)
from iam.domain.events.lifecycle import (
    EventKind,
    UserCreated,
    UserDeleted,
    UserRestored,
    UserSnapshot,
    UserUpdated,
)

# Type alias for user lifecycle events
LifecycleEvent = UserCreated | UserUpdated | UserDeleted | UserRestored

# Type alias for all domain events in the IAM context
DomainEvent = (
    UserCreated
    | UserUpdated
    | UserDeleted
    | UserRestored
    | UserRegistered
    | UserLoggedIn
    | UserLoggedOut
    | UserTokenRefreshed
)

__all__ = [
    # Lifecycle events
    "EventKind",
    "UserSnapshot",
    "UserCreated",
    "UserUpdated",
    "UserDeleted",
    "UserRestored",
    # Auth events
    "UserRegistered",
    "UserLoggedIn",
    "UserLoggedOut",
    "UserTokenRefreshed",
    # Type aliases
    "LifecycleEvent",
    "DomainEvent",
]
