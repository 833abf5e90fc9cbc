"""User application service for IAM bounded context.

Orchestrates user management: listing, creation, updates, soft deletion,
restore, permanent deletion, activation and statistics. Every mutation
runs the lifecycle observer hooks inside its transaction and dispatches
the resulting domain events after commit.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.lifecycle import UserLifecycleObserver
from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.application.policies import UserPolicy
from iam.application.security import hash_password
from iam.application.services.statistics import PeriodStarts
from iam.application.slugs import unique_slug
from iam.application.value_objects import Principal
from iam.domain.aggregates import User
from iam.domain.events import DomainEvent
from iam.domain.value_objects import UserId
from iam.ports.exceptions import NotDeletedError, UserNotFoundError
from iam.ports.repositories import (
    IAccessTokenRepository,
    IUserRepository,
    Page,
    SortDirection,
)
from shared_kernel.events import EventDispatcher

USER_SORT_FIELDS = ("name", "email", "username", "created_at")
DEFAULT_PER_PAGE = 15
MAX_PER_PAGE = 100


class UserService:
    """Application service for user management.

    Manages database transactions. Authorization checks run when an actor
    is given; calls without an actor are trusted internal calls.
    """

    def __init__(
        self,
        session: AsyncSession,
        user_repository: IUserRepository,
        token_repository: IAccessTokenRepository,
        observer: UserLifecycleObserver,
        dispatcher: EventDispatcher,
        policy: UserPolicy | None = None,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            session: Database session for transaction management
            user_repository: Repository for user persistence
            token_repository: Repository for access token revocation
            observer: Lifecycle hooks run around every mutation
            dispatcher: Delivers committed domain events to listeners
            policy: Authorization rules for actor-initiated changes
            probe: Optional domain probe for observability
        """
        self._session = session
        self._user_repository = user_repository
        self._token_repository = token_repository
        self._observer = observer
        self._dispatcher = dispatcher
        self._policy = policy or UserPolicy()
        self._probe = probe or DefaultUserServiceProbe()

    async def list_users(
        self,
        search: str | None = None,
        sort_by: str = "created_at",
        sort_direction: SortDirection = "asc",
        per_page: int = DEFAULT_PER_PAGE,
        page: int = 1,
    ) -> Page[User]:
        """List live users.

        Args:
            search: Substring matched on name, email and username
            sort_by: One of USER_SORT_FIELDS
            sort_direction: asc or desc
            per_page: Page size, clamped to 1..MAX_PER_PAGE
            page: One-based page number

        Raises:
            ValueError: If sort_by is not sortable
        """
        if sort_by not in USER_SORT_FIELDS:
            raise ValueError(f"Cannot sort users by '{sort_by}'")

        async with self._session.begin():
            return await self._user_repository.list(
                search=search or None,
                sort_by=sort_by,
                sort_direction=sort_direction,
                per_page=min(max(per_page, 1), MAX_PER_PAGE),
                page=max(page, 1),
            )

    async def get_by_username(self, username: str) -> User:
        """Retrieve a live user by username.

        Raises:
            UserNotFoundError: If no live user has this username
        """
        async with self._session.begin():
            return await self._require_by_username(username)

    async def get_by_id(self, user_id: UserId) -> User:
        """Retrieve a live user by ID.

        Raises:
            UserNotFoundError: If no live user has this ID
        """
        async with self._session.begin():
            user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id.value} not found")
        return user

    async def create(
        self,
        name: str,
        email: str,
        password: str,
        email_verified: bool = False,
    ) -> User:
        """Create a user with a unique username derived from the name.

        Raises:
            DuplicateEmailError: If the email is already taken
        """
        events: list[DomainEvent] = []
        try:
            async with self._session.begin():
                username = await unique_slug(
                    name, self._user_repository.username_exists, fallback="user"
                )
                user = User.create(
                    name=name,
                    email=email,
                    username=username,
                    password_hash=hash_password(password),
                    email_verified_at=datetime.now(UTC) if email_verified else None,
                )
                events += await self._observer.before_create(user)
                await self._user_repository.save(user)
                events += await self._observer.after_create(user)

        except Exception as e:
            self._probe.user_operation_failed(operation="create", error=repr(e))
            raise

        await self._dispatcher.dispatch(events)
        return user

    async def update(
        self,
        username: str,
        changes: Mapping[str, Any],
        actor: Principal | None = None,
    ) -> User:
        """Apply changes to a user.

        A `password` change is hashed before it is stored. Only attributes
        whose values differ are written; when nothing differs no hooks run
        and no event is emitted.

        Args:
            username: Route key of the user to update
            changes: Attribute values keyed by name (name, email, password)
            actor: The principal requesting the change

        Raises:
            UserNotFoundError: If no live user has this username
            UnauthorizedError: If the actor may not update this user
            DuplicateEmailError: If the new email is already taken
        """
        attributes = dict(changes)
        if "password" in attributes:
            attributes["password_hash"] = hash_password(attributes.pop("password"))

        events: list[DomainEvent] = []
        try:
            async with self._session.begin():
                user = await self._require_by_username(username)
                if actor is not None:
                    self._policy.authorize_update(actor, user)

                dirty = user.dirty_fields(attributes)
                if dirty:
                    events += await self._observer.before_update(user, dirty)
                    user.apply_changes(dirty)
                    await self._user_repository.save(user)
                    events += await self._observer.after_update(user, dirty)

        except Exception as e:
            self._probe.user_operation_failed(operation="update", error=repr(e))
            raise

        await self._dispatcher.dispatch(events)
        return user

    async def delete(self, username: str, actor: Principal | None = None) -> None:
        """Soft delete a user and revoke all of their access tokens.

        Token revocation happens inside the same transaction; if it fails
        the deletion is rolled back.

        Raises:
            UserNotFoundError: If no live user has this username
            UnauthorizedError: If the actor may not delete this user
            TokenRevocationError: If the tokens could not be revoked
        """
        events: list[DomainEvent] = []
        try:
            async with self._session.begin():
                user = await self._require_by_username(username)
                if actor is not None:
                    self._policy.authorize_delete(actor, user)

                events += await self._observer.before_delete(user)
                user.soft_delete()
                await self._user_repository.save(user)
                events += await self._observer.after_delete(user)

        except Exception as e:
            self._probe.user_operation_failed(operation="delete", error=repr(e))
            raise

        await self._dispatcher.dispatch(events)

    async def restore(self, user_id: str, actor: Principal | None = None) -> User:
        """Restore a soft-deleted user.

        Raises:
            UserNotFoundError: If no user, live or deleted, has this ID
            UnauthorizedError: If the actor may not restore this user
            NotDeletedError: If the user is not soft deleted
        """
        events: list[DomainEvent] = []
        try:
            async with self._session.begin():
                user = await self._require_any_by_id(user_id)
                if actor is not None:
                    self._policy.authorize_restore(actor, user)

                user.restore()
                await self._user_repository.save(user)
                events += await self._observer.after_restore(user)

        except NotDeletedError:
            self._probe.restore_rejected(user_id=user_id)
            raise
        except Exception as e:
            self._probe.user_operation_failed(operation="restore", error=repr(e))
            raise

        await self._dispatcher.dispatch(events)
        return user

    async def force_delete(self, user_id: str, actor: Principal | None = None) -> None:
        """Permanently delete a user, live or soft deleted.

        Access grants and tokens are removed with the row.

        Raises:
            UserNotFoundError: If no user has this ID
            UnauthorizedError: If the actor may not delete this user
        """
        events: list[DomainEvent] = []
        try:
            async with self._session.begin():
                user = await self._require_any_by_id(user_id)
                if actor is not None:
                    self._policy.authorize_force_delete(actor, user)

                await self._user_repository.delete(user)
                events += await self._observer.after_force_delete(user)

        except Exception as e:
            self._probe.user_operation_failed(operation="force_delete", error=repr(e))
            raise

        await self._dispatcher.dispatch(events)

    async def activate(self, user: User) -> User:
        """Mark the user's email as verified, if it is not already."""
        if user.email_verified_at is not None:
            return user

        async with self._session.begin():
            user.mark_email_verified()
            await self._user_repository.save(user)

        self._probe.user_activated(user_id=user.id.value)
        return user

    async def deactivate(self, user: User) -> User:
        """Clear the user's email verification and revoke all their tokens."""
        async with self._session.begin():
            user.clear_email_verification()
            await self._user_repository.save(user)
            revoked = await self._token_repository.delete_all_for_user(user.id)

        self._probe.user_deactivated(user_id=user.id.value, revoked_token_count=revoked)
        return user

    def is_active(self, user: User) -> bool:
        return user.is_active

    async def get_statistics(self) -> dict[str, int]:
        """Count users overall, by state and by registration period.

        Every count except `deleted` covers live users only.
        """
        periods = PeriodStarts.at()
        repo = self._user_repository

        async with self._session.begin():
            return {
                "total": await repo.count(),
                "active": await repo.count(verified=True),
                "inactive": await repo.count(verified=False),
                "deleted": await repo.count(deleted=True),
                "registered_today": await repo.count(since=periods.today),
                "registered_this_week": await repo.count(since=periods.this_week),
                "registered_this_month": await repo.count(since=periods.this_month),
            }

    async def _require_by_username(self, username: str) -> User:
        user = await self._user_repository.get_by_username(username)
        if user is None:
            raise UserNotFoundError(f"User '{username}' not found")
        return user

    async def _require_any_by_id(self, user_id: str) -> User:
        try:
            parsed = UserId.from_string(user_id)
        except ValueError as e:
            raise UserNotFoundError(f"User {user_id} not found") from e

        user = await self._user_repository.get_by_id(parsed, include_deleted=True)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user
