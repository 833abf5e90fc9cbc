"""Bearer token resolution for IAM bounded context.

Turns a presented plaintext token into a Principal. Resolution never
raises for a bad credential; it returns None and lets the access gate
produce the refusal.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.security import ACCESS_TOKEN_PREFIX, extract_prefix, verify_secret
from iam.application.value_objects import Principal
from iam.ports.repositories import IAccessTokenRepository, IUserRepository


class TokenAuthenticator:
    """Resolves access tokens to principals.

    Uses a session dedicated to credential resolution so the request's
    main session stays free for the service transactions that follow.
    """

    def __init__(
        self,
        session: AsyncSession,
        token_repository: IAccessTokenRepository,
        user_repository: IUserRepository,
        probe: AuthenticationProbe | None = None,
    ):
        """Initialize TokenAuthenticator with dependencies.

        Args:
            session: Dedicated database session for credential resolution
            token_repository: Repository for access token lookup
            user_repository: Repository for loading the token's owner
            probe: Optional domain probe for observability
        """
        self._session = session
        self._token_repository = token_repository
        self._user_repository = user_repository
        self._probe = probe or DefaultAuthenticationProbe()

    async def authenticate(self, plaintext: str) -> Principal | None:
        """Resolve a plaintext token to its owner.

        Soft-deleted owners still resolve, so the access gate can tell a
        deactivated account apart from a missing credential.

        Returns:
            The principal, or None if the token is malformed or unknown
        """
        if not plaintext.startswith(ACCESS_TOKEN_PREFIX):
            self._probe.credential_rejected(reason="malformed")
            return None

        candidates = await self._token_repository.list_by_prefix(
            extract_prefix(plaintext)
        )
        token = next(
            (c for c in candidates if verify_secret(plaintext, c.token_hash)),
            None,
        )
        if token is None:
            self._probe.credential_rejected(reason="unknown_token")
            await self._session.rollback()
            return None

        user = await self._user_repository.get_by_id(
            token.user_id, include_deleted=True
        )
        if user is None:
            self._probe.credential_rejected(reason="user_missing")
            await self._session.rollback()
            return None

        # SQLAlchemy auto-began a transaction with the queries above;
        # commit it after recording usage.
        token.record_usage()
        if not await self._token_repository.touch(token.id, token.last_used_at):
            self._probe.credential_rejected(reason="revoked")
            await self._session.rollback()
            return None
        await self._session.commit()

        self._probe.token_authenticated(token_id=token.id.value, user_id=user.id.value)
        return Principal.from_user(user, token_id=token.id)
