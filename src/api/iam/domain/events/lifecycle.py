"""User lifecycle domain events.

Each event is an immutable record of a completed lifecycle transition:
the entity snapshot taken at the moment of the transition, the kind of
transition, and when it happened.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import ClassVar


class EventKind(StrEnum):
    """Lifecycle transition an event describes."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    RESTORED = "restored"
    FORCE_DELETED = "force_deleted"


@dataclass(frozen=True)
class UserSnapshot:
    """Point-in-time copy of a user's public state.

    Never contains the password hash or any credential material.
    """

    user_id: str
    name: str
    email: str
    username: str
    email_verified_at: datetime | None
    deleted_at: datetime | None


@dataclass(frozen=True)
class UserCreated:
    """Event raised after a user row has been inserted.

    Attributes:
        user: Snapshot of the created user
        occurred_at: When the event occurred (UTC)
    """

    user: UserSnapshot
    occurred_at: datetime
    kind: ClassVar[EventKind] = EventKind.CREATED


@dataclass(frozen=True)
class UserUpdated:
    """Event raised after changes to a user have been persisted.

    Attributes:
        user: Snapshot of the user after the update
        changed_fields: Names of the attributes that changed, sorted
        occurred_at: When the event occurred (UTC)
    """

    user: UserSnapshot
    changed_fields: tuple[str, ...]
    occurred_at: datetime
    kind: ClassVar[EventKind] = EventKind.UPDATED


@dataclass(frozen=True)
class UserDeleted:
    """Event raised after a user has been soft deleted.

    By the time this event exists every access token of the user has
    been revoked.

    Attributes:
        user: Snapshot of the user, deleted_at set
        revoked_token_count: Number of tokens revoked by the deletion
        occurred_at: When the event occurred (UTC)
    """

    user: UserSnapshot
    revoked_token_count: int
    occurred_at: datetime
    kind: ClassVar[EventKind] = EventKind.DELETED


@dataclass(frozen=True)
class UserRestored:
    """Event raised after a soft-deleted user has been restored.

    Attributes:
        user: Snapshot of the restored user
        occurred_at: When the event occurred (UTC)
    """

    user: UserSnapshot
    occurred_at: datetime
    kind: ClassVar[EventKind] = EventKind.RESTORED
