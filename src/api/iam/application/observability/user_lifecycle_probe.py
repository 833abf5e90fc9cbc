"""Protocol for user lifecycle observability.

The lifecycle observer reports every user transition through this probe.
Event names match the hook that emits them, so the log stream reads as
the lifecycle of each user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserLifecycleProbe(Protocol):
    """Domain probe for user lifecycle transitions."""

    def creating_user(self, email: str) -> None:
        """Record intent to create a user."""
        ...

    def user_created(self, user_id: str, email: str, username: str) -> None:
        """Record that a user was created."""
        ...

    def updating_user(self, user_id: str, changes: dict[str, Any]) -> None:
        """Record the dirty attribute values about to be written."""
        ...

    def user_updated(self, user_id: str, changes: dict[str, Any]) -> None:
        """Record the attribute values that were written."""
        ...

    def deleting_user(self, user_id: str, email: str) -> None:
        """Record intent to soft delete a user."""
        ...

    def user_deleted(
        self, user_id: str, email: str, revoked_token_count: int
    ) -> None:
        """Record that a user was soft deleted and their tokens revoked."""
        ...

    def token_revocation_failed(self, user_id: str, error: str) -> None:
        """Record that revoking a deleted user's tokens failed."""
        ...

    def user_restored(self, user_id: str, email: str) -> None:
        """Record that a soft-deleted user was restored."""
        ...

    def user_permanently_deleted(self, user_id: str, email: str) -> None:
        """Record that a user row was removed for good."""
        ...

    def with_context(self, context: ObservationContext) -> UserLifecycleProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserLifecycleProbe:
    """Default implementation of UserLifecycleProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultUserLifecycleProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserLifecycleProbe(logger=self._logger, context=context)

    def creating_user(self, email: str) -> None:
        self._logger.info(
            "creating_user",
            email=email,
            **self._get_context_kwargs(),
        )

    def user_created(self, user_id: str, email: str, username: str) -> None:
        self._logger.info(
            "user_created",
            user_id=user_id,
            email=email,
            username=username,
            **self._get_context_kwargs(),
        )

    def updating_user(self, user_id: str, changes: dict[str, Any]) -> None:
        self._logger.info(
            "updating_user",
            user_id=user_id,
            changes=changes,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: str, changes: dict[str, Any]) -> None:
        self._logger.info(
            "user_updated",
            user_id=user_id,
            changes=changes,
            **self._get_context_kwargs(),
        )

    def deleting_user(self, user_id: str, email: str) -> None:
        self._logger.warning(
            "deleting_user",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def user_deleted(
        self, user_id: str, email: str, revoked_token_count: int
    ) -> None:
        self._logger.warning(
            "user_deleted",
            user_id=user_id,
            email=email,
            revoked_token_count=revoked_token_count,
            **self._get_context_kwargs(),
        )

    def token_revocation_failed(self, user_id: str, error: str) -> None:
        self._logger.error(
            "token_revocation_failed",
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def user_restored(self, user_id: str, email: str) -> None:
        self._logger.info(
            "user_restored",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def user_permanently_deleted(self, user_id: str, email: str) -> None:
        self._logger.warning(
            "user_permanently_deleted",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )
