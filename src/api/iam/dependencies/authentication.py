"""Credential resolution and the access gate as FastAPI dependencies.

`resolve_principal` turns the bearer token into an optional principal
and never raises for a bad credential. `require_active_user` runs the
access gate on that principal and raises AccessDeniedError, which the
application renders as a 401 or 403 response.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.access_gate import AccessDeniedError, evaluate_access
from iam.application.observability import (
    AccessGateProbe,
    AuthenticationProbe,
    DefaultAccessGateProbe,
    DefaultAuthenticationProbe,
)
from iam.application.services import TokenAuthenticator
from iam.application.value_objects import Principal
from iam.infrastructure.access_token_repository import AccessTokenRepository
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_auth_session

# Security scheme for Swagger UI integration. Missing or non-bearer
# credentials resolve to None instead of an automatic 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_authentication_probe() -> AuthenticationProbe:
    """Get AuthenticationProbe instance.

    Returns:
        DefaultAuthenticationProbe instance for observability
    """
    return DefaultAuthenticationProbe()


def get_access_gate_probe() -> AccessGateProbe:
    """Get AccessGateProbe instance.

    Returns:
        DefaultAccessGateProbe instance for observability
    """
    return DefaultAccessGateProbe()


def get_token_authenticator(
    session: Annotated[AsyncSession, Depends(get_auth_session)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> TokenAuthenticator:
    """Get TokenAuthenticator bound to the dedicated auth session."""
    return TokenAuthenticator(
        session=session,
        token_repository=AccessTokenRepository(session=session),
        user_repository=UserRepository(session=session),
        probe=probe,
    )


async def resolve_principal(
    authenticator: Annotated[TokenAuthenticator, Depends(get_token_authenticator)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> Principal | None:
    """Resolve the bearer token of the request to a principal.

    Returns:
        The principal, or None when the token is missing or unknown
    """
    if credentials is None or not credentials.credentials:
        return None
    return await authenticator.authenticate(credentials.credentials)


async def require_active_user(
    principal: Annotated[Principal | None, Depends(resolve_principal)],
    probe: Annotated[AccessGateProbe, Depends(get_access_gate_probe)],
) -> Principal:
    """Admit only verified, non-deleted principals.

    Raises:
        AccessDeniedError: With the gate's denial when refused
    """
    denial = evaluate_access(principal, probe=probe)
    if denial is not None:
        raise AccessDeniedError.from_denial(denial)

    assert principal is not None
    return principal


ActiveUser = Annotated[Principal, Depends(require_active_user)]
