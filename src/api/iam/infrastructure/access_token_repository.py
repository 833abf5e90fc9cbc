"""PostgreSQL implementation of IAccessTokenRepository.

Stores personal access tokens. Only the bcrypt hash and lookup prefix
are persisted; revocation deletes rows.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import AccessToken
from iam.domain.value_objects import AccessTokenId, UserId
from iam.infrastructure.models import AccessTokenModel
from iam.infrastructure.observability import (
    AccessTokenRepositoryProbe,
    DefaultAccessTokenRepositoryProbe,
)
from iam.ports.repositories import IAccessTokenRepository


class AccessTokenRepository(IAccessTokenRepository):
    """Repository for AccessToken persistence to PostgreSQL."""

    def __init__(
        self,
        session: AsyncSession,
        probe: AccessTokenRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultAccessTokenRepositoryProbe()

    async def save(self, token: AccessToken) -> None:
        """Insert a newly issued token.

        Usage of an existing token is recorded with touch(), which never
        inserts.
        """
        model = AccessTokenModel(
            id=token.id.value,
            user_id=token.user_id.value,
            name=token.name,
            token_hash=token.token_hash,
            prefix=token.prefix,
            last_used_at=token.last_used_at,
        )
        self._session.add(model)
        await self._session.flush()
        self._probe.token_saved(token.id.value, token.user_id.value)

    async def touch(self, token_id: AccessTokenId, last_used_at: datetime) -> bool:
        """Update the last use of a token if its row still exists.

        Returns:
            True if a row was updated, False if the token has been revoked
        """
        stmt = (
            update(AccessTokenModel)
            .where(AccessTokenModel.id == token_id.value)
            .values(last_used_at=last_used_at)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def list_by_prefix(self, prefix: str) -> list[AccessToken]:
        """Retrieve every token sharing a lookup prefix.

        The prefix is the first 12 characters of the plaintext. Collisions
        are possible, so callers verify the hash of each candidate.
        """
        stmt = select(AccessTokenModel).where(AccessTokenModel.prefix == prefix)
        result = await self._session.execute(stmt)
        tokens = [self._to_aggregate(model) for model in result.scalars().all()]

        if len(tokens) > 1:
            self._probe.token_prefix_collision(prefix, len(tokens))

        return tokens

    async def delete(self, token_id: AccessTokenId) -> bool:
        """Revoke a single token.

        Returns:
            True if deleted, False if not found
        """
        stmt = delete(AccessTokenModel).where(AccessTokenModel.id == token_id.value)
        result = await self._session.execute(stmt)
        deleted = result.rowcount > 0
        if deleted:
            self._probe.token_deleted(token_id.value)
        return deleted

    async def delete_all_for_user(self, user_id: UserId) -> int:
        """Revoke every token of a user.

        Returns:
            Number of tokens revoked
        """
        stmt = delete(AccessTokenModel).where(
            AccessTokenModel.user_id == user_id.value
        )
        result = await self._session.execute(stmt)
        count = result.rowcount
        self._probe.tokens_deleted_for_user(user_id.value, count)
        return count

    def _to_aggregate(self, model: AccessTokenModel) -> AccessToken:
        """Convert SQLAlchemy model to domain aggregate."""
        return AccessToken(
            id=AccessTokenId(value=model.id),
            user_id=UserId(value=model.user_id),
            name=model.name,
            token_hash=model.token_hash,
            prefix=model.prefix,
            created_at=model.created_at,
            last_used_at=model.last_used_at,
        )
