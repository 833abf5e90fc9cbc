"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user and company repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations.

    Records domain events during user persistence operations.
    """

    def user_saved(self, user_id: str, username: str) -> None:
        """Record that a user was successfully saved."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        ...

    def username_not_found(self, username: str) -> None:
        """Record that a username was not found."""
        ...

    def duplicate_email(self, email: str) -> None:
        """Record that a duplicate email was detected."""
        ...

    def user_removed(self, user_id: str) -> None:
        """Record that a user row was permanently removed."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class CompanyRepositoryProbe(Protocol):
    """Domain probe for company and access grant repository operations."""

    def company_saved(self, company_id: str, slug: str) -> None:
        """Record that a company was successfully saved."""
        ...

    def company_not_found(self, company_id: str) -> None:
        """Record that a company was not found."""
        ...

    def company_removed(self, company_id: str) -> None:
        """Record that a company row was permanently removed."""
        ...

    def access_granted(self, user_id: str, company_id: str) -> None:
        """Record that a user was granted access to a company."""
        ...

    def with_context(self, context: ObservationContext) -> CompanyRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_saved(self, user_id: str, username: str) -> None:
        """Record that a user was successfully saved."""
        self._logger.info(
            "user_saved",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def username_not_found(self, username: str) -> None:
        """Record that a username was not found."""
        self._logger.debug(
            "username_not_found",
            username=username,
            **self._get_context_kwargs(),
        )

    def duplicate_email(self, email: str) -> None:
        """Record that a duplicate email was detected."""
        self._logger.warning(
            "duplicate_email",
            email=email,
            **self._get_context_kwargs(),
        )

    def user_removed(self, user_id: str) -> None:
        """Record that a user row was permanently removed."""
        self._logger.info(
            "user_removed",
            user_id=user_id,
            **self._get_context_kwargs(),
        )


class DefaultCompanyRepositoryProbe:
    """Default implementation of CompanyRepositoryProbe using structlog."""

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
    ) -> DefaultCompanyRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultCompanyRepositoryProbe(logger=self._logger, context=context)

    def company_saved(self, company_id: str, slug: str) -> None:
        self._logger.info(
            "company_saved",
            company_id=company_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def company_not_found(self, company_id: str) -> None:
        self._logger.debug(
            "company_not_found",
            company_id=company_id,
            **self._get_context_kwargs(),
        )

    def company_removed(self, company_id: str) -> None:
        self._logger.info(
            "company_removed",
            company_id=company_id,
            **self._get_context_kwargs(),
        )

    def access_granted(self, user_id: str, company_id: str) -> None:
        self._logger.info(
            "access_granted",
            user_id=user_id,
            company_id=company_id,
            **self._get_context_kwargs(),
        )
