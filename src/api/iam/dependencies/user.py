"""Dependency injection for user management."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.lifecycle import UserLifecycleObserver
from iam.application.observability import (
    DefaultUserLifecycleProbe,
    DefaultUserServiceProbe,
    UserLifecycleProbe,
    UserServiceProbe,
)
from iam.application.services import UserService
from iam.dependencies.events import get_event_dispatcher
from iam.infrastructure.access_token_repository import AccessTokenRepository
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_write_session
from shared_kernel.events import EventDispatcher


def get_user_service_probe() -> UserServiceProbe:
    """Get UserServiceProbe instance.

    Returns:
        DefaultUserServiceProbe instance for observability
    """
    return DefaultUserServiceProbe()


def get_user_lifecycle_probe() -> UserLifecycleProbe:
    """Get UserLifecycleProbe instance.

    Returns:
        DefaultUserLifecycleProbe instance for observability
    """
    return DefaultUserLifecycleProbe()


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> UserRepository:
    """Get UserRepository instance.

    Args:
        session: Async database session

    Returns:
        UserRepository instance
    """
    return UserRepository(session=session)


def get_access_token_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> AccessTokenRepository:
    """Get AccessTokenRepository instance.

    Args:
        session: Async database session (shared with the user repository)

    Returns:
        AccessTokenRepository instance
    """
    return AccessTokenRepository(session=session)


def get_user_lifecycle_observer(
    token_repo: Annotated[AccessTokenRepository, Depends(get_access_token_repository)],
    probe: Annotated[UserLifecycleProbe, Depends(get_user_lifecycle_probe)],
) -> UserLifecycleObserver:
    """Get UserLifecycleObserver bound to the request's session."""
    return UserLifecycleObserver(token_repository=token_repo, probe=probe)


def get_user_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    token_repo: Annotated[AccessTokenRepository, Depends(get_access_token_repository)],
    observer: Annotated[UserLifecycleObserver, Depends(get_user_lifecycle_observer)],
    dispatcher: Annotated[EventDispatcher, Depends(get_event_dispatcher)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance.

    Args:
        session: Database session for transaction management
        user_repo: User repository (shares session via FastAPI dependency caching)
        token_repo: Access token repository (same session)
        observer: Lifecycle hooks bound to the same session
        dispatcher: Application-wide event dispatcher
        probe: User service probe for observability

    Returns:
        UserService instance
    """
    return UserService(
        session=session,
        user_repository=user_repo,
        token_repository=token_repo,
        observer=observer,
        dispatcher=dispatcher,
        probe=probe,
    )
