"""User lifecycle observer.

UserService calls these hooks explicitly around every user mutation.
Hooks run inside the mutation's transaction and return the domain
events the transition produced; the service dispatches them only after
the transaction commits.

Deleting a user revokes every access token the user holds. Revocation
must succeed: a failure is logged and re-raised so the deletion rolls
back.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from iam.application.observability import (
    DefaultUserLifecycleProbe,
    UserLifecycleProbe,
)
from iam.domain.aggregates import User
from iam.domain.events import (
    DomainEvent,
    UserCreated,
    UserDeleted,
    UserRestored,
    UserUpdated,
)
from iam.ports.exceptions import TokenRevocationError
from iam.ports.repositories import IAccessTokenRepository

_REDACTED = "********"
_SECRET_FIELDS = frozenset({"password_hash"})


def _loggable(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of changes safe to write to logs."""
    return {
        name: _REDACTED if name in _SECRET_FIELDS else value
        for name, value in changes.items()
    }


class UserLifecycleObserver:
    """Logs user transitions, revokes credentials on delete, builds events."""

    def __init__(
        self,
        token_repository: IAccessTokenRepository,
        probe: UserLifecycleProbe | None = None,
    ) -> None:
        """Initialize the observer.

        Args:
            token_repository: Repository used to revoke tokens on delete,
                bound to the mutation's session
            probe: Optional domain probe for observability
        """
        self._token_repository = token_repository
        self._probe = probe or DefaultUserLifecycleProbe()

    async def before_create(self, user: User) -> list[DomainEvent]:
        self._probe.creating_user(email=user.email)
        return []

    async def after_create(self, user: User) -> list[DomainEvent]:
        self._probe.user_created(
            user_id=user.id.value,
            email=user.email,
            username=user.username,
        )
        return [UserCreated(user=user.snapshot(), occurred_at=datetime.now(UTC))]

    async def before_update(
        self, user: User, changes: Mapping[str, Any]
    ) -> list[DomainEvent]:
        """Log the dirty attribute values before they are written.

        Args:
            user: The user in its pre-update state
            changes: Only the attributes whose values differ
        """
        self._probe.updating_user(user_id=user.id.value, changes=_loggable(changes))
        return []

    async def after_update(
        self, user: User, changes: Mapping[str, Any]
    ) -> list[DomainEvent]:
        self._probe.user_updated(user_id=user.id.value, changes=_loggable(changes))
        return [
            UserUpdated(
                user=user.snapshot(),
                changed_fields=tuple(sorted(changes)),
                occurred_at=datetime.now(UTC),
            )
        ]

    async def before_delete(self, user: User) -> list[DomainEvent]:
        self._probe.deleting_user(user_id=user.id.value, email=user.email)
        return []

    async def after_delete(self, user: User) -> list[DomainEvent]:
        """Revoke all of the user's tokens and record the deletion.

        Raises:
            TokenRevocationError: If the tokens could not be revoked
        """
        try:
            revoked = await self._token_repository.delete_all_for_user(user.id)
        except Exception as e:
            self._probe.token_revocation_failed(user_id=user.id.value, error=repr(e))
            raise TokenRevocationError(
                f"Could not revoke access tokens of user {user.id.value}"
            ) from e

        self._probe.user_deleted(
            user_id=user.id.value,
            email=user.email,
            revoked_token_count=revoked,
        )
        return [
            UserDeleted(
                user=user.snapshot(),
                revoked_token_count=revoked,
                occurred_at=datetime.now(UTC),
            )
        ]

    async def after_restore(self, user: User) -> list[DomainEvent]:
        self._probe.user_restored(user_id=user.id.value, email=user.email)
        return [UserRestored(user=user.snapshot(), occurred_at=datetime.now(UTC))]

    async def after_force_delete(self, user: User) -> list[DomainEvent]:
        self._probe.user_permanently_deleted(user_id=user.id.value, email=user.email)
        return []
