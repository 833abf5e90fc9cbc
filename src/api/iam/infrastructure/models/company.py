"""SQLAlchemy ORM model for the companies table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, SoftDeleteMixin, TimestampMixin


class CompanyModel(Base, TimestampMixin, SoftDeleteMixin):
    """ORM model for companies table.

    The slug is unique across live and soft-deleted rows so that a restored
    company keeps its route key.
    """

    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<CompanyModel(id={self.id}, slug={self.slug})>"
