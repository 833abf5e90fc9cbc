"""Company aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from iam.domain.exceptions import NotDeletedError
from iam.domain.value_objects import MAIN_COMPANY_NAME, CompanyId


@dataclass(eq=False)
class Company:
    """Company aggregate representing a tenant organisation.

    Business rules:
    - The slug is derived from the name at creation time and is not
      regenerated on rename
    - The company named "Main" is shared by every user and can never be
      deleted
    - Soft deletion keeps the row; restore clears deleted_at
    """

    id: CompanyId
    name: str
    slug: str
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(cls, name: str, slug: str) -> Company:
        """Factory method for creating a new company."""
        now = datetime.now(UTC)
        return cls(
            id=CompanyId.generate(),
            name=name,
            slug=slug,
            created_at=now,
            updated_at=now,
        )

    def rename(self, name: str) -> None:
        """Change the display name. The slug is kept."""
        if name != self.name:
            self.name = name
            self.updated_at = datetime.now(UTC)

    def soft_delete(self) -> None:
        """Mark the company as deleted without removing the row."""
        self.deleted_at = datetime.now(UTC)
        self.updated_at = self.deleted_at

    def restore(self) -> None:
        """Clear the soft-deletion marker.

        Raises:
            NotDeletedError: If the company is not soft deleted
        """
        if self.deleted_at is None:
            raise NotDeletedError(f"Company {self.id.value} is not deleted")

        self.deleted_at = None
        self.updated_at = datetime.now(UTC)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_main(self) -> bool:
        return self.name == MAIN_COMPANY_NAME

    def __eq__(self, other: object) -> bool:
        """Companies are equal if they have the same ID."""
        if not isinstance(other, Company):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
