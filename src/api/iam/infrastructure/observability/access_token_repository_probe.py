"""Domain probe for personal access token repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to token persistence. Token secrets
and hashes are never logged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccessTokenRepositoryProbe(Protocol):
    """Domain probe for access token repository operations."""

    def token_saved(self, token_id: str, user_id: str) -> None:
        """Record that a token was successfully saved."""
        ...

    def token_prefix_collision(self, prefix: str, count: int) -> None:
        """Record that multiple tokens share the same prefix.

        Args:
            prefix: The colliding prefix (first 6 chars logged for diagnostics)
            count: Number of tokens sharing this prefix
        """
        ...

    def token_deleted(self, token_id: str) -> None:
        """Record that a single token was revoked."""
        ...

    def tokens_deleted_for_user(self, user_id: str, count: int) -> None:
        """Record that every token of a user was revoked."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> AccessTokenRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccessTokenRepositoryProbe:
    """Default implementation of AccessTokenRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultAccessTokenRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessTokenRepositoryProbe(logger=self._logger, context=context)

    def token_saved(self, token_id: str, user_id: str) -> None:
        """Record that a token was successfully saved."""
        self._logger.debug(
            "access_token_saved",
            token_id=token_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def token_prefix_collision(self, prefix: str, count: int) -> None:
        """Record that multiple tokens share the same prefix."""
        self._logger.warning(
            "access_token_prefix_collision",
            prefix=prefix[:6],
            count=count,
            **self._get_context_kwargs(),
        )

    def token_deleted(self, token_id: str) -> None:
        """Record that a single token was revoked."""
        self._logger.info(
            "access_token_deleted",
            token_id=token_id,
            **self._get_context_kwargs(),
        )

    def tokens_deleted_for_user(self, user_id: str, count: int) -> None:
        """Record that every token of a user was revoked."""
        self._logger.info(
            "access_tokens_deleted_for_user",
            user_id=user_id,
            count=count,
            **self._get_context_kwargs(),
        )
