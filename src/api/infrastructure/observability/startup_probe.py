"""Domain probe for application startup and lifecycle events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_started(self, app_name: str, version: str) -> None:
        """Record that the application finished starting."""
        ...

    def schema_created(self, table_count: int) -> None:
        """Record that missing tables were created at startup."""
        ...

    def application_stopping(self, pending_event_tasks: int) -> None:
        """Record that shutdown began with background listener tasks pending."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_started(self, app_name: str, version: str) -> None:
        """Record that the application finished starting."""
        self._logger.info(
            "application_started",
            app_name=app_name,
            version=version,
            **self._get_context_kwargs(),
        )

    def schema_created(self, table_count: int) -> None:
        """Record that missing tables were created at startup."""
        self._logger.info(
            "database_schema_created",
            table_count=table_count,
            **self._get_context_kwargs(),
        )

    def application_stopping(self, pending_event_tasks: int) -> None:
        """Record that shutdown began with background listener tasks pending."""
        self._logger.info(
            "application_stopping",
            pending_event_tasks=pending_event_tasks,
            **self._get_context_kwargs(),
        )
