"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass

from ulid import ULID


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Args:
            value: ULID string

        Returns:
            UserId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid UserId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class CompanyId:
    """Identifier for a Company aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> CompanyId:
        """Generate a new CompanyId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> CompanyId:
        """Create CompanyId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid CompanyId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class AccessTokenId:
    """Identifier for a personal access token."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> AccessTokenId:
        """Generate a new AccessTokenId using ULID."""
        return cls(value=str(ULID()))


@dataclass(frozen=True)
class AccessId:
    """Identifier for an Access grant."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> AccessId:
        """Generate a new AccessId using ULID."""
        return cls(value=str(ULID()))


# Company every new user is granted access to; created for the first user.
MAIN_COMPANY_NAME = "Main"
