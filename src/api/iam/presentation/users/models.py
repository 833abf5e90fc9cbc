"""Pydantic models for user API requests and responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

from iam.application.security import BCRYPT_MAX_BYTES
from iam.domain.aggregates import User
from iam.presentation.pagination import PaginationMeta


def check_password_bytes(value: str | None) -> str | None:
    """Reject passwords bcrypt cannot hash. The limit counts bytes, not characters."""
    if value is not None and len(value.encode()) > BCRYPT_MAX_BYTES:
        raise ValueError(
            f"The password may not be greater than {BCRYPT_MAX_BYTES} bytes."
        )
    return value


class CreateUserRequest(BaseModel):
    """Request model for creating a user."""

    name: str = Field(..., description="Display name", min_length=1, max_length=255)
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., description="Password", min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)


class UpdateUserRequest(BaseModel):
    """Request model for updating a user. Omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str | None) -> str | None:
        return check_password_bytes(value)

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were provided."""
        return self.model_dump(exclude_none=True)


class UserResponse(BaseModel):
    """Response model for user. Never includes credential material."""

    id: str = Field(..., description="User ID (ULID format)")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    username: str = Field(..., description="Username (route key)")
    email_verified_at: datetime | None = Field(None, description="Verification time")
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert domain User aggregate to API response.

        Args:
            user: User domain aggregate

        Returns:
            UserResponse
        """
        return cls(
            id=user.id.value,
            name=user.name,
            email=user.email,
            username=user.username,
            email_verified_at=user.email_verified_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
            deleted_at=user.deleted_at,
        )


class UserListResponse(BaseModel):
    """One page of users."""

    data: list[UserResponse]
    meta: PaginationMeta


class UserStatisticsResponse(BaseModel):
    """User counts. All counts except `deleted` cover live users only."""

    total: int
    active: int
    inactive: int
    deleted: int
    registered_today: int
    registered_this_week: int
    registered_this_month: int
