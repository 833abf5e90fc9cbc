"""Personal access token aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from iam.domain.value_objects import AccessTokenId, UserId


@dataclass
class AccessToken:
    """A bearer credential issued to a user.

    Business rules:
    - Only the bcrypt hash and a lookup prefix are stored
    - Revocation deletes the token; there is no revoked state
    - Usage is tracked via last_used_at
    """

    id: AccessTokenId
    user_id: UserId
    name: str
    token_hash: str
    prefix: str
    created_at: datetime
    last_used_at: datetime | None = None

    @classmethod
    def issue(
        cls,
        user_id: UserId,
        name: str,
        token_hash: str,
        prefix: str,
    ) -> AccessToken:
        """Factory method for a newly issued token.

        Args:
            user_id: Owner of the token
            name: Label for the token (e.g. auth_token)
            token_hash: The hashed secret (never store plaintext)
            prefix: Leading characters of the plaintext used for lookup
        """
        return cls(
            id=AccessTokenId.generate(),
            user_id=user_id,
            name=name,
            token_hash=token_hash,
            prefix=prefix,
            created_at=datetime.now(UTC),
        )

    def record_usage(self) -> None:
        """Record that this token was used to authenticate a request."""
        self.last_used_at = datetime.now(UTC)
