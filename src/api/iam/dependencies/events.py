"""Dependency injection for domain event dispatch."""

from functools import lru_cache

from iam.application.listeners import build_listener_registry
from iam.infrastructure.company_repository import AccessRepository, CompanyRepository
from infrastructure.database.dependencies import get_session_factory
from infrastructure.settings import get_event_settings, get_settings
from shared_kernel.events import DefaultEventDispatchProbe, EventDispatcher


@lru_cache
def get_event_dispatcher() -> EventDispatcher:
    """Get the application-wide event dispatcher (singleton).

    One dispatcher owns every background delivery so they can all be
    drained on shutdown.

    Returns:
        EventDispatcher wired with the IAM listener table and the
        configured dispatch modes
    """
    probe = DefaultEventDispatchProbe()
    registry = build_listener_registry(
        session_factory=get_session_factory(),
        company_repository_factory=CompanyRepository,
        access_repository_factory=AccessRepository,
        admin_email=get_settings().admin_email,
        dispatch_probe=probe,
    )
    return EventDispatcher(
        registry=registry,
        mode_for=get_event_settings().mode_for,
        probe=probe,
    )
