"""Protocol for company application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CompanyServiceProbe(Protocol):
    """Domain probe for company application service operations."""

    def company_created(self, company_id: str, slug: str, user_id: str) -> None:
        """Record that a company was created by a user."""
        ...

    def company_updated(self, company_id: str, name: str) -> None:
        """Record that a company was renamed."""
        ...

    def company_deleted(self, company_id: str) -> None:
        """Record that a company was soft deleted."""
        ...

    def company_restored(self, company_id: str) -> None:
        """Record that a company was restored."""
        ...

    def company_permanently_deleted(self, company_id: str) -> None:
        """Record that a company row was removed for good."""
        ...

    def company_operation_failed(self, operation: str, error: str) -> None:
        """Record that a company operation failed."""
        ...

    def with_context(self, context: ObservationContext) -> CompanyServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCompanyServiceProbe:
    """Default implementation of CompanyServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultCompanyServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultCompanyServiceProbe(logger=self._logger, context=context)

    def company_created(self, company_id: str, slug: str, user_id: str) -> None:
        self._logger.info(
            "company_created",
            company_id=company_id,
            slug=slug,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def company_updated(self, company_id: str, name: str) -> None:
        self._logger.info(
            "company_updated",
            company_id=company_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def company_deleted(self, company_id: str) -> None:
        self._logger.warning(
            "company_deleted",
            company_id=company_id,
            **self._get_context_kwargs(),
        )

    def company_restored(self, company_id: str) -> None:
        self._logger.info(
            "company_restored",
            company_id=company_id,
            **self._get_context_kwargs(),
        )

    def company_permanently_deleted(self, company_id: str) -> None:
        self._logger.warning(
            "company_permanently_deleted",
            company_id=company_id,
            **self._get_context_kwargs(),
        )

    def company_operation_failed(self, operation: str, error: str) -> None:
        self._logger.error(
            "company_operation_failed",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
