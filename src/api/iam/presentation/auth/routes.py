"""HTTP routes for registration, login and token management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from iam.application.services import AuthService, UserService
from iam.dependencies.auth import get_auth_service
from iam.dependencies.authentication import ActiveUser
from iam.dependencies.user import get_user_service
from iam.presentation.auth.models import (
    AuthenticatedResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
)
from iam.presentation.users.models import UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])

UNKNOWN_IP_ADDRESS = "0.0.0.0"
UNKNOWN_USER_AGENT = "Unknown"


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else UNKNOWN_IP_ADDRESS


def _user_agent(request: Request) -> str:
    return request.headers.get("user-agent") or UNKNOWN_USER_AGENT


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthenticatedResponse,
)
async def register(
    request: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthenticatedResponse:
    """Create an account and return its first access token.

    No credential is required. The new account starts unverified, so
    the returned token is refused on gated routes until the email is
    verified.

    Args:
        request: Registration details
        service: Auth service for orchestration

    Returns:
        The created user and a plaintext token

    Raises:
        DuplicateEmailError: Rendered as 422 if the email is taken
    """
    user, issued = await service.register(
        name=request.name, email=request.email, password=request.password
    )
    return AuthenticatedResponse(
        message="User registered successfully",
        user=UserResponse.from_domain(user),
        access_token=issued.plaintext,
    )


@router.post("/login", response_model=AuthenticatedResponse)
async def login(
    request: Request,
    credentials: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthenticatedResponse:
    """Exchange email and password for a new access token.

    Raises:
        InvalidCredentialsError: Rendered as 422 on a bad email or password
    """
    user, issued = await service.login(
        email=credentials.email,
        password=credentials.password,
        ip_address=_client_ip(request),
        user_agent=_user_agent(request),
    )
    return AuthenticatedResponse(
        message="Login successful",
        user=UserResponse.from_domain(user),
        access_token=issued.plaintext,
    )


@router.get("/me", response_model=UserResponse)
async def me(
    principal: ActiveUser,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Return the authenticated user."""
    user = await service.get_by_id(principal.user_id)
    return UserResponse.from_domain(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    principal: ActiveUser,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Revoke the token used for this request."""
    await service.logout(principal, ip_address=_client_ip(request))
    return MessageResponse(message="Logged out successfully")


@router.post("/logout-all", response_model=MessageResponse)
async def logout_all(
    request: Request,
    principal: ActiveUser,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Revoke every token of the authenticated user."""
    await service.logout_all(principal, ip_address=_client_ip(request))
    return MessageResponse(message="Logged out from all devices successfully")


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    principal: ActiveUser,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Replace the token used for this request with a new one.

    The presented token stops working as soon as this returns.
    """
    issued = await service.refresh(principal)
    return TokenResponse(
        message="Token refreshed successfully", access_token=issued.plaintext
    )
