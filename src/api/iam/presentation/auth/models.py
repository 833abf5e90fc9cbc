"""Pydantic models for auth API requests and responses."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

from iam.presentation.users.models import UserResponse, check_password_bytes


class RegisterRequest(BaseModel):
    """Request model for self-registration."""

    name: str = Field(..., description="Display name", min_length=1, max_length=255)
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., description="Password", min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)


class LoginRequest(BaseModel):
    """Request model for exchanging credentials for a token."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """A freshly issued token. The plaintext is shown only once."""

    message: str
    access_token: str = Field(..., description="Plaintext bearer token")
    token_type: Literal["Bearer"] = "Bearer"


class AuthenticatedResponse(TokenResponse):
    """Response for register and login."""

    user: UserResponse


class MessageResponse(BaseModel):
    message: str
