"""Authentication domain events.

Raised by the auth flows (register, login, logout, token refresh). These
events never carry plaintext tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from iam.domain.events.lifecycle import UserSnapshot


@dataclass(frozen=True)
class UserRegistered:
    """Event raised when a user signs up through the public endpoint."""

    user: UserSnapshot
    occurred_at: datetime


@dataclass(frozen=True)
class UserLoggedIn:
    """Event raised when a user exchanges credentials for a token."""

    user: UserSnapshot
    ip_address: str
    user_agent: str
    occurred_at: datetime


@dataclass(frozen=True)
class UserLoggedOut:
    """Event raised when a user revokes one or all of their tokens."""

    user: UserSnapshot
    ip_address: str
    all_devices: bool
    occurred_at: datetime


@dataclass(frozen=True)
class UserTokenRefreshed:
    """Event raised when a user swaps their current token for a new one."""

    user: UserSnapshot
    occurred_at: datetime
