"""Protocol for user application service observability.

Defines the interface for domain probes that capture application-level
domain events for user service operations. Lifecycle transitions are
reported by the lifecycle observer; this probe covers what the observer
does not see.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user application service operations."""

    def user_activated(self, user_id: str) -> None:
        """Record that a user's email was marked verified."""
        ...

    def user_deactivated(self, user_id: str, revoked_token_count: int) -> None:
        """Record that a user was deactivated and their tokens revoked."""
        ...

    def restore_rejected(self, user_id: str) -> None:
        """Record an attempt to restore a user that is not deleted."""
        ...

    def user_operation_failed(
        self,
        operation: str,
        error: str,
    ) -> None:
        """Record that a user operation failed."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_activated(self, user_id: str) -> None:
        """Record that a user's email was marked verified."""
        self._logger.info(
            "user_activated",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_deactivated(self, user_id: str, revoked_token_count: int) -> None:
        """Record that a user was deactivated and their tokens revoked."""
        self._logger.warning(
            "user_deactivated",
            user_id=user_id,
            revoked_token_count=revoked_token_count,
            **self._get_context_kwargs(),
        )

    def restore_rejected(self, user_id: str) -> None:
        """Record an attempt to restore a user that is not deleted."""
        self._logger.info(
            "user_restore_rejected",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_operation_failed(
        self,
        operation: str,
        error: str,
    ) -> None:
        """Record that a user operation failed."""
        self._logger.error(
            "user_operation_failed",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
