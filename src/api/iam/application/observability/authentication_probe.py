"""Protocols for authentication and access gate observability.

Defines the interfaces for domain probes that capture credential
resolution and access gate decisions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for bearer token resolution."""

    def token_authenticated(
        self,
        token_id: str,
        user_id: str,
    ) -> None:
        """Record that a bearer token resolved to a principal."""
        ...

    def credential_rejected(
        self,
        reason: str,
    ) -> None:
        """Record that a presented credential did not resolve to a principal.

        Args:
            reason: Failure reason (malformed, unknown_token, user_missing,
                revoked)
        """
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class AccessGateProbe(Protocol):
    """Domain probe for access gate decisions."""

    def access_granted(self, user_id: str) -> None:
        """Record that a principal was admitted."""
        ...

    def access_denied(self, reason: str, user_id: str | None) -> None:
        """Record that the gate refused a request.

        Args:
            reason: unauthenticated, email_not_verified or account_deactivated
            user_id: The refused principal, None when unauthenticated
        """
        ...

    def with_context(self, context: ObservationContext) -> AccessGateProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def token_authenticated(
        self,
        token_id: str,
        user_id: str,
    ) -> None:
        """Record that a bearer token resolved to a principal."""
        self._logger.debug(
            "token_authenticated",
            token_id=token_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def credential_rejected(
        self,
        reason: str,
    ) -> None:
        """Record that a presented credential did not resolve to a principal."""
        self._logger.warning(
            "credential_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )


class DefaultAccessGateProbe:
    """Default implementation of AccessGateProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAccessGateProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessGateProbe(logger=self._logger, context=context)

    def access_granted(self, user_id: str) -> None:
        self._logger.debug(
            "access_granted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def access_denied(self, reason: str, user_id: str | None) -> None:
        self._logger.info(
            "access_denied",
            reason=reason,
            user_id=user_id,
            **self._get_context_kwargs(),
        )
