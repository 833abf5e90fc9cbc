"""Unit tests for the credential resolution and access gate dependencies."""

from dataclasses import replace
from datetime import UTC, datetime
from unittest.mock import AsyncMock, create_autospec

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from iam.application.access_gate import (
    AccountDeactivatedError,
    EmailNotVerifiedError,
    UnauthenticatedError,
)
from iam.application.observability import AccessGateProbe
from iam.application.services import TokenAuthenticator
from iam.application.value_objects import Principal
from iam.dependencies.authentication import require_active_user, resolve_principal


@pytest.fixture
def mock_authenticator() -> AsyncMock:
    return AsyncMock(spec=TokenAuthenticator)


@pytest.fixture
def mock_gate_probe():
    return create_autospec(AccessGateProbe, instance=True)


@pytest.fixture
def principal(verified_user) -> Principal:
    return Principal.from_user(verified_user)


class TestResolvePrincipal:
    @pytest.mark.asyncio
    async def test_returns_none_without_credentials(self, mock_authenticator):
        assert await resolve_principal(mock_authenticator, None) is None
        mock_authenticator.authenticate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_returns_none_for_empty_token(self, mock_authenticator):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="")

        assert await resolve_principal(mock_authenticator, credentials) is None
        mock_authenticator.authenticate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delegates_to_authenticator(self, mock_authenticator, principal):
        mock_authenticator.authenticate.return_value = principal
        credentials = HTTPAuthorizationCredentials(
            scheme="Bearer", credentials="adm_token"
        )

        result = await resolve_principal(mock_authenticator, credentials)

        assert result is principal
        mock_authenticator.authenticate.assert_awaited_once_with("adm_token")


class TestRequireActiveUser:
    @pytest.mark.asyncio
    async def test_admits_verified_live_user(self, principal, mock_gate_probe):
        assert await require_active_user(principal, mock_gate_probe) is principal
        mock_gate_probe.access_granted.assert_called_once_with(
            user_id=principal.user_id.value
        )

    @pytest.mark.asyncio
    async def test_missing_principal_is_unauthenticated(self, mock_gate_probe):
        with pytest.raises(UnauthenticatedError) as exc_info:
            await require_active_user(None, mock_gate_probe)

        assert exc_info.value.denial.status_code == 401

    @pytest.mark.asyncio
    async def test_unverified_is_refused(self, principal, mock_gate_probe):
        with pytest.raises(EmailNotVerifiedError):
            await require_active_user(
                replace(principal, email_verified_at=None), mock_gate_probe
            )

    @pytest.mark.asyncio
    async def test_deleted_is_refused(self, principal, mock_gate_probe):
        deleted = replace(principal, deleted_at=datetime(2026, 2, 1, tzinfo=UTC))

        with pytest.raises(AccountDeactivatedError) as exc_info:
            await require_active_user(deleted, mock_gate_probe)

        assert exc_info.value.denial.body()["error"] == "account_deactivated"

    @pytest.mark.asyncio
    async def test_unverified_check_runs_before_deleted_check(
        self, principal, mock_gate_probe
    ):
        both = replace(
            principal,
            email_verified_at=None,
            deleted_at=datetime(2026, 2, 1, tzinfo=UTC),
        )

        with pytest.raises(EmailNotVerifiedError):
            await require_active_user(both, mock_gate_probe)
