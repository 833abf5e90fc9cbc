"""Database infrastructure - engine, sessions and declarative base."""

from infrastructure.database.models import Base, SoftDeleteMixin, TimestampMixin

__all__ = [
    "Base",
    "SoftDeleteMixin",
    "TimestampMixin",
]
