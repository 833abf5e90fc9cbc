"""Protocol for auth application service observability.

Never receives plaintext tokens or passwords.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthServiceProbe(Protocol):
    """Domain probe for register, login, logout and refresh flows."""

    def token_issued(self, user_id: str, token_id: str) -> None:
        """Record that an access token was issued."""
        ...

    def login_failed(self, email: str) -> None:
        """Record a login attempt with bad credentials."""
        ...

    def tokens_revoked(self, user_id: str, count: int, all_devices: bool) -> None:
        """Record that one or all tokens of a user were revoked."""
        ...

    def with_context(self, context: ObservationContext) -> AuthServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthServiceProbe:
    """Default implementation of AuthServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthServiceProbe(logger=self._logger, context=context)

    def token_issued(self, user_id: str, token_id: str) -> None:
        self._logger.info(
            "access_token_issued",
            user_id=user_id,
            token_id=token_id,
            **self._get_context_kwargs(),
        )

    def login_failed(self, email: str) -> None:
        self._logger.warning(
            "login_failed",
            email=email,
            **self._get_context_kwargs(),
        )

    def tokens_revoked(self, user_id: str, count: int, all_devices: bool) -> None:
        self._logger.info(
            "access_tokens_revoked",
            user_id=user_id,
            count=count,
            all_devices=all_devices,
            **self._get_context_kwargs(),
        )
