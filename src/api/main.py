"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

import iam.infrastructure.models  # noqa: F401 - registers tables on Base.metadata
from iam.dependencies.events import get_event_dispatcher
from iam.presentation import register_exception_handlers
from iam.presentation import router as iam_router
from infrastructure.database import Base
from infrastructure.database.dependencies import (
    close_database_connections,
    get_write_engine,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def admin_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Optional schema creation for development databases
    - Draining background event listeners on shutdown
    - Engine disposal on shutdown
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()

    if settings.create_schema:
        async with get_write_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        probe.schema_created(table_count=len(Base.metadata.tables))

    probe.application_started(app_name=settings.app_name, version=__version__)

    yield

    dispatcher = get_event_dispatcher()
    probe.application_stopping(pending_event_tasks=dispatcher.pending_tasks)
    await dispatcher.drain()
    await close_database_connections()


app = FastAPI(
    title="Admin Backend API",
    description="User, company and access token administration",
    version=__version__,
    lifespan=admin_lifespan,
)

register_exception_handlers(app)

# Include IAM bounded context routes
app.include_router(iam_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
