"""Authentication application service for IAM bounded context.

Handles registration, login, logout and token refresh. Tokens are
personal access tokens: the plaintext is returned once, only its bcrypt
hash and lookup prefix are stored, and revocation deletes the row.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import AuthServiceProbe, DefaultAuthServiceProbe
from iam.application.security import (
    extract_prefix,
    generate_access_token,
    hash_secret,
    verify_password,
)
from iam.application.services.user_service import UserService
from iam.application.value_objects import IssuedToken, Principal
from iam.domain.aggregates import AccessToken, User
from iam.domain.events import (
    UserLoggedIn,
    UserLoggedOut,
    UserRegistered,
    UserTokenRefreshed,
)
from iam.domain.value_objects import UserId
from iam.ports.exceptions import InvalidCredentialsError, UserNotFoundError
from iam.ports.repositories import IAccessTokenRepository, IUserRepository
from shared_kernel.events import EventDispatcher


class AuthService:
    """Application service for the token-based auth flows.

    Manages database transactions and dispatches auth events after commit.
    """

    def __init__(
        self,
        session: AsyncSession,
        user_service: UserService,
        user_repository: IUserRepository,
        token_repository: IAccessTokenRepository,
        dispatcher: EventDispatcher,
        token_name: str = "auth_token",
        probe: AuthServiceProbe | None = None,
    ):
        """Initialize AuthService with dependencies.

        Args:
            session: Database session for transaction management
            user_service: Creates users through the lifecycle hooks
            user_repository: Repository for credential lookup
            token_repository: Repository for access tokens
            dispatcher: Delivers committed domain events to listeners
            token_name: Name recorded on issued tokens
            probe: Optional domain probe for observability
        """
        self._session = session
        self._user_service = user_service
        self._user_repository = user_repository
        self._token_repository = token_repository
        self._dispatcher = dispatcher
        self._token_name = token_name
        self._probe = probe or DefaultAuthServiceProbe()

    async def register(
        self, name: str, email: str, password: str
    ) -> tuple[User, IssuedToken]:
        """Create an account and issue its first token.

        Raises:
            DuplicateEmailError: If the email is already taken
        """
        user = await self._user_service.create(name=name, email=email, password=password)

        async with self._session.begin():
            issued = await self._issue(user.id)

        await self._dispatcher.dispatch(
            [UserRegistered(user=user.snapshot(), occurred_at=datetime.now(UTC))]
        )
        return user, issued

    async def login(
        self, email: str, password: str, ip_address: str, user_agent: str
    ) -> tuple[User, IssuedToken]:
        """Exchange credentials for a new token.

        Soft-deleted users cannot log in. Unverified users can, but the
        access gate refuses them on protected routes.

        Raises:
            InvalidCredentialsError: If the email or password is wrong
        """
        async with self._session.begin():
            user = await self._user_repository.get_by_email(email)
            if user is None or not verify_password(password, user.password_hash):
                self._probe.login_failed(email=email)
                raise InvalidCredentialsError("The provided credentials are incorrect.")

            issued = await self._issue(user.id)

        await self._dispatcher.dispatch(
            [
                UserLoggedIn(
                    user=user.snapshot(),
                    ip_address=ip_address,
                    user_agent=user_agent,
                    occurred_at=datetime.now(UTC),
                )
            ]
        )
        return user, issued

    async def logout(self, principal: Principal, ip_address: str) -> None:
        """Revoke the token used for the current request."""
        async with self._session.begin():
            user = await self._require_user(principal.user_id)
            count = 0
            if principal.token_id is not None:
                count = int(await self._token_repository.delete(principal.token_id))

        self._probe.tokens_revoked(
            user_id=user.id.value, count=count, all_devices=False
        )
        await self._dispatcher.dispatch(
            [
                UserLoggedOut(
                    user=user.snapshot(),
                    ip_address=ip_address,
                    all_devices=False,
                    occurred_at=datetime.now(UTC),
                )
            ]
        )

    async def logout_all(self, principal: Principal, ip_address: str) -> None:
        """Revoke every token of the current user."""
        async with self._session.begin():
            user = await self._require_user(principal.user_id)
            count = await self._token_repository.delete_all_for_user(user.id)

        self._probe.tokens_revoked(user_id=user.id.value, count=count, all_devices=True)
        await self._dispatcher.dispatch(
            [
                UserLoggedOut(
                    user=user.snapshot(),
                    ip_address=ip_address,
                    all_devices=True,
                    occurred_at=datetime.now(UTC),
                )
            ]
        )

    async def refresh(self, principal: Principal) -> IssuedToken:
        """Revoke the current token and issue a replacement."""
        async with self._session.begin():
            user = await self._require_user(principal.user_id)
            if principal.token_id is not None:
                await self._token_repository.delete(principal.token_id)
            issued = await self._issue(user.id)

        await self._dispatcher.dispatch(
            [UserTokenRefreshed(user=user.snapshot(), occurred_at=datetime.now(UTC))]
        )
        return issued

    async def _issue(self, user_id: UserId) -> IssuedToken:
        """Issue a token inside the caller's transaction."""
        plaintext = generate_access_token()
        token = AccessToken.issue(
            user_id=user_id,
            name=self._token_name,
            token_hash=hash_secret(plaintext),
            prefix=extract_prefix(plaintext),
        )
        await self._token_repository.save(token)
        self._probe.token_issued(user_id=user_id.value, token_id=token.id.value)
        return IssuedToken(token_id=token.id, plaintext=plaintext)

    async def _require_user(self, user_id: UserId) -> User:
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id.value} not found")
        return user
