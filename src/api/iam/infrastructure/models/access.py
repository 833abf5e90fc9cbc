"""SQLAlchemy ORM model for the accesses table."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class AccessModel(Base, TimestampMixin):
    """ORM model for accesses table.

    Each row grants one user access to one company. Grants follow the
    lifetime of both rows and cascade when either is force deleted.
    """

    __tablename__ = "accesses"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "company_id", name="uq_accesses_user_company"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<AccessModel(id={self.id}, user_id={self.user_id}, "
            f"company_id={self.company_id})>"
        )
