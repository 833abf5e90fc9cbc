"""User aggregate for IAM context."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, ClassVar

from iam.domain.events import UserSnapshot
from iam.domain.exceptions import NotDeletedError
from iam.domain.value_objects import UserId


@dataclass(eq=False)
class User:
    """User aggregate representing a person managing the admin backend.

    Business rules:
    - Email addresses are unique
    - The username is a slug derived from the name at creation time and is
      not regenerated when the name changes
    - A user is active only when their email is verified and they are not
      soft deleted
    - Soft deletion keeps the row; restore clears deleted_at
    """

    UPDATABLE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"name", "email", "password_hash", "email_verified_at"}
    )

    id: UserId
    name: str
    email: str
    username: str
    password_hash: str
    email_verified_at: datetime | None = None
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        username: str,
        password_hash: str,
        email_verified_at: datetime | None = None,
    ) -> User:
        """Factory method for creating a new user.

        Args:
            name: Display name
            email: Unique email address
            username: Unique slug used as the route key
            password_hash: bcrypt hash of the password (never plaintext)
            email_verified_at: Verification timestamp, if already verified

        Returns:
            A new, not yet persisted User
        """
        now = datetime.now(UTC)
        return cls(
            id=UserId.generate(),
            name=name,
            email=email,
            username=username,
            password_hash=password_hash,
            email_verified_at=email_verified_at,
            created_at=now,
            updated_at=now,
        )

    def dirty_fields(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Return the subset of changes that differ from current state.

        Raises:
            ValueError: If a change names an attribute that cannot be updated
        """
        unknown = set(changes) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update user fields: {sorted(unknown)}")

        return {
            name: value
            for name, value in changes.items()
            if getattr(self, name) != value
        }

    def apply_changes(self, changes: Mapping[str, Any]) -> None:
        """Apply already-validated attribute changes."""
        for name, value in changes.items():
            setattr(self, name, value)
        if changes:
            self.updated_at = datetime.now(UTC)

    def mark_email_verified(self) -> None:
        """Mark the email address as verified now, if not already verified."""
        if self.email_verified_at is None:
            self.email_verified_at = datetime.now(UTC)
            self.updated_at = self.email_verified_at

    def clear_email_verification(self) -> None:
        """Reset the email verification timestamp."""
        self.email_verified_at = None
        self.updated_at = datetime.now(UTC)

    def soft_delete(self) -> None:
        """Mark the user as deleted without removing the row."""
        self.deleted_at = datetime.now(UTC)
        self.updated_at = self.deleted_at

    def restore(self) -> None:
        """Clear the soft-deletion marker.

        Raises:
            NotDeletedError: If the user is not soft deleted
        """
        if self.deleted_at is None:
            raise NotDeletedError(f"User {self.id.value} is not deleted")

        self.deleted_at = None
        self.updated_at = datetime.now(UTC)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_active(self) -> bool:
        """Active users have a verified email and are not soft deleted."""
        return self.email_verified_at is not None and self.deleted_at is None

    def snapshot(self) -> UserSnapshot:
        """Capture the public state of this user for a domain event."""
        return UserSnapshot(
            user_id=self.id.value,
            name=self.name,
            email=self.email,
            username=self.username,
            email_verified_at=self.email_verified_at,
            deleted_at=self.deleted_at,
        )

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.username})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
