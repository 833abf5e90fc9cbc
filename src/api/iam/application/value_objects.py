"""Application-layer value objects for IAM bounded context.

These are value objects specific to the application layer, representing
cross-cutting concerns like the authentication context of a request.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from iam.domain.aggregates import User
from iam.domain.value_objects import AccessTokenId, UserId


@dataclass(frozen=True)
class Principal:
    """The authenticated actor behind a request.

    Resolved from a bearer token before the access gate runs. A principal
    is not necessarily admitted: the gate still checks email verification
    and soft deletion.

    This is an application-layer concept (not domain) because it represents
    the authentication context of the request, not a core business entity.

    Attributes:
        user_id: ID of the authenticated user
        username: Route key of the user
        email: Email address of the user
        email_verified_at: When the email was verified, None if unverified
        deleted_at: When the user was soft deleted, None if live
        token_id: The access token used for this request, if any
    """

    user_id: UserId
    username: str
    email: str
    email_verified_at: datetime | None
    deleted_at: datetime | None
    token_id: AccessTokenId | None = None

    @classmethod
    def from_user(cls, user: User, token_id: AccessTokenId | None = None) -> Principal:
        return cls(
            user_id=user.id,
            username=user.username,
            email=user.email,
            email_verified_at=user.email_verified_at,
            deleted_at=user.deleted_at,
            token_id=token_id,
        )


@dataclass(frozen=True)
class IssuedToken:
    """A freshly issued access token.

    The plaintext is only available here, at issue time.
    """

    token_id: AccessTokenId
    plaintext: str
