"""PostgreSQL implementation of IUserRepository.

Repositories work on the caller's session. They flush to surface
integrity errors early but never commit; the application service owns
the transaction.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import DuplicateEmailError
from iam.ports.repositories import IUserRepository, Page, SortDirection

_SORT_COLUMNS: dict[str, Any] = {
    "name": UserModel.name,
    "email": UserModel.email,
    "username": UserModel.username,
    "created_at": UserModel.created_at,
}


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates."""

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def save(self, user: User) -> None:
        """Persist a user aggregate.

        Creates a new user or updates an existing one.

        Raises:
            DuplicateEmailError: If the email already belongs to another user
        """
        existing = await self.get_by_email(user.email, include_deleted=True)
        if existing and existing.id != user.id:
            self._probe.duplicate_email(user.email)
            raise DuplicateEmailError(f"Email '{user.email}' is already taken")

        try:
            model = await self._get_model(user.id.value, include_deleted=True)

            if model:
                model.name = user.name
                model.email = user.email
                model.password_hash = user.password_hash
                model.email_verified_at = user.email_verified_at
                model.deleted_at = user.deleted_at
            else:
                model = UserModel(
                    id=user.id.value,
                    name=user.name,
                    email=user.email,
                    username=user.username,
                    password_hash=user.password_hash,
                    email_verified_at=user.email_verified_at,
                    deleted_at=user.deleted_at,
                )
                self._session.add(model)

            # Flush to catch integrity errors inside the caller's transaction
            await self._session.flush()

        except IntegrityError as e:
            if "email" in str(e):
                self._probe.duplicate_email(user.email)
                raise DuplicateEmailError(
                    f"Email '{user.email}' is already taken"
                ) from e
            raise

        self._probe.user_saved(user.id.value, user.username)

    async def get_by_id(
        self, user_id: UserId, include_deleted: bool = False
    ) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user
            include_deleted: Also match soft-deleted users

        Returns:
            The User aggregate, or None if not found
        """
        model = await self._get_model(user_id.value, include_deleted)

        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        return self._to_aggregate(model)

    async def get_by_username(self, username: str) -> User | None:
        """Retrieve a live user by their username."""
        stmt = select(UserModel).where(
            UserModel.username == username, UserModel.deleted_at.is_(None)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.username_not_found(username)
            return None

        return self._to_aggregate(model)

    async def get_by_email(
        self, email: str, include_deleted: bool = False
    ) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email)
        if not include_deleted:
            stmt = stmt.where(UserModel.deleted_at.is_(None))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_aggregate(model) if model else None

    async def username_exists(self, username: str) -> bool:
        stmt = select(func.count()).select_from(UserModel).where(
            UserModel.username == username
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def list(
        self,
        search: str | None,
        sort_by: str,
        sort_direction: SortDirection,
        per_page: int,
        page: int,
    ) -> Page[User]:
        """List live users, filtered and ordered, one page at a time."""
        stmt: Select[Any] = select(UserModel).where(UserModel.deleted_at.is_(None))
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    UserModel.name.ilike(pattern),
                    UserModel.email.ilike(pattern),
                    UserModel.username.ilike(pattern),
                )
            )

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self._session.execute(count_stmt)).scalar_one()

        column = _SORT_COLUMNS[sort_by]
        order = column.desc() if sort_direction == "desc" else column.asc()
        stmt = stmt.order_by(order).limit(per_page).offset((page - 1) * per_page)

        result = await self._session.execute(stmt)
        users = [self._to_aggregate(model) for model in result.scalars().all()]
        return Page(items=users, total=total, page=page, per_page=per_page)

    async def count(
        self,
        since: datetime | None = None,
        verified: bool | None = None,
        deleted: bool = False,
    ) -> int:
        """Count users matching the given filters."""
        stmt = select(func.count()).select_from(UserModel)
        if deleted:
            stmt = stmt.where(UserModel.deleted_at.is_not(None))
        else:
            stmt = stmt.where(UserModel.deleted_at.is_(None))
        if since is not None:
            stmt = stmt.where(UserModel.created_at >= since)
        if verified is True:
            stmt = stmt.where(UserModel.email_verified_at.is_not(None))
        elif verified is False:
            stmt = stmt.where(UserModel.email_verified_at.is_(None))

        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def delete(self, user: User) -> None:
        """Permanently remove a user row. Grants and tokens cascade."""
        model = await self._get_model(user.id.value, include_deleted=True)
        if model is None:
            self._probe.user_not_found(user.id.value)
            return

        await self._session.delete(model)
        await self._session.flush()
        self._probe.user_removed(user.id.value)

    async def _get_model(
        self, user_id: str, include_deleted: bool
    ) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        if not include_deleted:
            stmt = stmt.where(UserModel.deleted_at.is_(None))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_aggregate(self, model: UserModel) -> User:
        """Convert SQLAlchemy model to domain aggregate."""
        return User(
            id=UserId(value=model.id),
            name=model.name,
            email=model.email,
            username=model.username,
            password_hash=model.password_hash,
            email_verified_at=model.email_verified_at,
            deleted_at=model.deleted_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
