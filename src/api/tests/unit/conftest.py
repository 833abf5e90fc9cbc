"""Unit test fixtures with mocked dependencies."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password=SecretStr("testpass"),
    )


@pytest.fixture
def mock_session() -> AsyncMock:
    """Provide a mocked AsyncSession whose begin() works as a context manager."""
    session = AsyncMock()
    session.begin = MagicMock(return_value=MagicMock())
    session.begin.return_value.__aenter__ = AsyncMock(return_value=None)
    session.begin.return_value.__aexit__ = AsyncMock(return_value=False)
    session.add = MagicMock()
    return session


@pytest.fixture
def verified_user():
    """A live user with a verified email."""
    from iam.domain.aggregates import User

    return User.create(
        name="Alice Admin",
        email="alice@example.com",
        username="alice-admin",
        password_hash="hashed",
        email_verified_at=datetime(2026, 1, 1, tzinfo=UTC),
    )


@pytest.fixture
def other_user():
    """Another live, verified user."""
    from iam.domain.aggregates import User

    return User.create(
        name="Bob Builder",
        email="bob@example.com",
        username="bob-builder",
        password_hash="hashed",
        email_verified_at=datetime(2026, 1, 1, tzinfo=UTC),
    )
