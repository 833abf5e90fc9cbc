"""Dependency injection for the auth flows."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import AuthServiceProbe, DefaultAuthServiceProbe
from iam.application.services import AuthService, UserService
from iam.dependencies.events import get_event_dispatcher
from iam.dependencies.user import (
    get_access_token_repository,
    get_user_repository,
    get_user_service,
)
from iam.infrastructure.access_token_repository import AccessTokenRepository
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_write_session
from infrastructure.settings import get_auth_settings
from shared_kernel.events import EventDispatcher


def get_auth_service_probe() -> AuthServiceProbe:
    """Get AuthServiceProbe instance.

    Returns:
        DefaultAuthServiceProbe instance for observability
    """
    return DefaultAuthServiceProbe()


def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    user_service: Annotated[UserService, Depends(get_user_service)],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    token_repo: Annotated[AccessTokenRepository, Depends(get_access_token_repository)],
    dispatcher: Annotated[EventDispatcher, Depends(get_event_dispatcher)],
    probe: Annotated[AuthServiceProbe, Depends(get_auth_service_probe)],
) -> AuthService:
    """Get AuthService instance.

    Args:
        session: Database session for transaction management
        user_service: Creates users through the lifecycle hooks
        user_repo: User repository (shares session via FastAPI dependency caching)
        token_repo: Access token repository (same session)
        dispatcher: Application-wide event dispatcher
        probe: Auth service probe for observability

    Returns:
        AuthService instance
    """
    return AuthService(
        session=session,
        user_service=user_service,
        user_repository=user_repo,
        token_repository=token_repo,
        dispatcher=dispatcher,
        token_name=get_auth_settings().token_name,
        probe=probe,
    )
