"""SQLAlchemy ORM model for the personal_access_tokens table.

The token_hash is the only sensitive data stored; the plaintext token
is returned once at issue time and never persisted.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class AccessTokenModel(Base, TimestampMixin):
    """ORM model for personal_access_tokens table.

    Notes:
    - prefix holds the first 12 characters of the plaintext for lookup
    - revocation deletes the row
    """

    __tablename__ = "personal_access_tokens"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    token_hash: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    prefix: Mapped[str] = mapped_column(String(12), nullable=False, index=True)
    last_used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<AccessTokenModel(id={self.id}, user_id={self.user_id}, "
            f"prefix={self.prefix})>"
        )
