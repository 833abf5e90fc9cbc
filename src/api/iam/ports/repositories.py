"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations operate on the caller's session and never
commit; transaction boundaries belong to the application services.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Literal, Protocol, TypeVar, runtime_checkable

from iam.domain.aggregates import Access, AccessToken, Company, User
from iam.domain.value_objects import AccessTokenId, CompanyId, UserId

T = TypeVar("T")

SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing plus the total row count."""

    items: list[T]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, -(-self.total // self.per_page))


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence.

    Lookups exclude soft-deleted users unless `include_deleted` is set.
    """

    async def save(self, user: User) -> None:
        """Persist a user aggregate.

        Creates a new user or updates an existing one.

        Raises:
            DuplicateEmailError: If the email already belongs to another user
        """
        ...

    async def get_by_id(
        self, user_id: UserId, include_deleted: bool = False
    ) -> User | None:
        """Retrieve a user by their ID."""
        ...

    async def get_by_username(self, username: str) -> User | None:
        """Retrieve a non-deleted user by their username."""
        ...

    async def get_by_email(
        self, email: str, include_deleted: bool = False
    ) -> User | None:
        """Retrieve a user by email address."""
        ...

    async def username_exists(self, username: str) -> bool:
        """Check whether a username is taken, including by deleted users."""
        ...

    async def list(
        self,
        search: str | None,
        sort_by: str,
        sort_direction: SortDirection,
        per_page: int,
        page: int,
    ) -> Page[User]:
        """List non-deleted users.

        Args:
            search: Case-insensitive substring matched on name, email and username
            sort_by: Column to order by
            sort_direction: asc or desc
            per_page: Page size
            page: One-based page number
        """
        ...

    async def count(
        self,
        since: datetime | None = None,
        verified: bool | None = None,
        deleted: bool = False,
    ) -> int:
        """Count users.

        Args:
            since: Only count users created at or after this instant
            verified: Filter on email verification when not None
            deleted: Count soft-deleted users instead of live ones
        """
        ...

    async def delete(self, user: User) -> None:
        """Permanently remove a user row."""
        ...


@runtime_checkable
class ICompanyRepository(Protocol):
    """Repository for Company aggregate persistence.

    Lookups exclude soft-deleted companies unless `include_deleted` is set.
    """

    async def save(self, company: Company) -> None:
        """Persist a company aggregate."""
        ...

    async def get_by_id(
        self, company_id: CompanyId, include_deleted: bool = False
    ) -> Company | None:
        """Retrieve a company by its ID."""
        ...

    async def get_by_slug(self, slug: str) -> Company | None:
        """Retrieve a non-deleted company by slug."""
        ...

    async def get_by_name(self, name: str) -> Company | None:
        """Retrieve a non-deleted company by exact name."""
        ...

    async def slug_exists(self, slug: str) -> bool:
        """Check whether a slug is taken, including by deleted companies."""
        ...

    async def list(
        self,
        search: str | None,
        sort_by: str,
        sort_direction: SortDirection,
        per_page: int,
        page: int,
    ) -> Page[Company]:
        """List non-deleted companies, searching on name and slug."""
        ...

    async def count(
        self, since: datetime | None = None, deleted: bool = False
    ) -> int:
        """Count companies created since an instant, live or deleted."""
        ...

    async def delete(self, company: Company) -> None:
        """Permanently remove a company row."""
        ...


@runtime_checkable
class IAccessRepository(Protocol):
    """Repository for user-to-company access grants."""

    async def save(self, access: Access) -> None:
        """Persist an access grant."""
        ...

    async def exists(self, user_id: UserId, company_id: CompanyId) -> bool:
        """Check whether a user has been granted access to a company."""
        ...


@runtime_checkable
class IAccessTokenRepository(Protocol):
    """Repository for personal access tokens."""

    async def save(self, token: AccessToken) -> None:
        """Insert a newly issued token."""
        ...

    async def touch(self, token_id: AccessTokenId, last_used_at: datetime) -> bool:
        """Record the last use of an existing token.

        Never inserts. A token revoked since it was looked up stays revoked.

        Returns:
            True if the token row still exists, False otherwise
        """
        ...

    async def list_by_prefix(self, prefix: str) -> list[AccessToken]:
        """Retrieve candidate tokens sharing a lookup prefix."""
        ...

    async def delete(self, token_id: AccessTokenId) -> bool:
        """Revoke a single token.

        Returns:
            True if a token was deleted, False if not found
        """
        ...

    async def delete_all_for_user(self, user_id: UserId) -> int:
        """Revoke every token of a user.

        Returns:
            Number of tokens revoked
        """
        ...
