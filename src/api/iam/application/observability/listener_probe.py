"""Protocol for domain event listener observability.

Most listeners exist to leave a trace of what happened to a user; this
probe is that trace.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ListenerProbe(Protocol):
    """Domain probe for IAM event listeners."""

    def main_company_created(self, company_id: str, user_id: str) -> None:
        """Record that the shared company was created for the first user."""
        ...

    def company_access_assigned(
        self, user_id: str, company_id: str, company_name: str
    ) -> None:
        """Record that a new user was granted access to a company."""
        ...

    def welcome_email_sent(self, user_id: str, email: str) -> None:
        """Record that a welcome email was handed off for a new user."""
        ...

    def admin_notified_of_new_user(
        self, user_id: str, email: str, admin_email: str
    ) -> None:
        """Record that the administrator was notified of a registration."""
        ...

    def user_logged_in(
        self, user_id: str, email: str, ip_address: str, user_agent: str
    ) -> None:
        """Record a login."""
        ...

    def user_logged_out(
        self, user_id: str, email: str, ip_address: str, all_devices: bool
    ) -> None:
        """Record a logout."""
        ...

    def token_refreshed(self, user_id: str, email: str) -> None:
        """Record a token refresh."""
        ...

    def user_audit_recorded(
        self,
        event_type: str,
        user_id: str,
        changed_fields: tuple[str, ...],
    ) -> None:
        """Record an audit trail entry for a user lifecycle event."""
        ...

    def with_context(self, context: ObservationContext) -> ListenerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultListenerProbe:
    """Default implementation of ListenerProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultListenerProbe:
        """Create a new probe with observation context bound."""
        return DefaultListenerProbe(logger=self._logger, context=context)

    def main_company_created(self, company_id: str, user_id: str) -> None:
        self._logger.info(
            "main_company_created",
            company_id=company_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def company_access_assigned(
        self, user_id: str, company_id: str, company_name: str
    ) -> None:
        self._logger.info(
            "company_access_assigned",
            user_id=user_id,
            company_id=company_id,
            company_name=company_name,
            **self._get_context_kwargs(),
        )

    def welcome_email_sent(self, user_id: str, email: str) -> None:
        self._logger.info(
            "welcome_email_sent",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def admin_notified_of_new_user(
        self, user_id: str, email: str, admin_email: str
    ) -> None:
        self._logger.info(
            "admin_notified_of_new_user",
            user_id=user_id,
            email=email,
            admin_email=admin_email,
            **self._get_context_kwargs(),
        )

    def user_logged_in(
        self, user_id: str, email: str, ip_address: str, user_agent: str
    ) -> None:
        self._logger.info(
            "user_logged_in",
            user_id=user_id,
            email=email,
            ip_address=ip_address,
            user_agent=user_agent,
            **self._get_context_kwargs(),
        )

    def user_logged_out(
        self, user_id: str, email: str, ip_address: str, all_devices: bool
    ) -> None:
        self._logger.info(
            "user_logged_out",
            user_id=user_id,
            email=email,
            ip_address=ip_address,
            all_devices=all_devices,
            **self._get_context_kwargs(),
        )

    def token_refreshed(self, user_id: str, email: str) -> None:
        self._logger.info(
            "token_refreshed",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def user_audit_recorded(
        self,
        event_type: str,
        user_id: str,
        changed_fields: tuple[str, ...],
    ) -> None:
        self._logger.info(
            "user_audit_recorded",
            event_type=event_type,
            user_id=user_id,
            changed_fields=list(changed_fields),
            **self._get_context_kwargs(),
        )
