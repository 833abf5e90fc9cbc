"""Unit tests for the access gate.

The gate checks, in order: principal present, email verified, account
not soft deleted. The first failing check decides the response.
"""

from datetime import UTC, datetime

import pytest
from unittest.mock import create_autospec

from iam.application.access_gate import (
    ACCOUNT_DEACTIVATED,
    EMAIL_NOT_VERIFIED,
    UNAUTHENTICATED,
    AccessDeniedError,
    AccountDeactivatedError,
    EmailNotVerifiedError,
    UnauthenticatedError,
    evaluate_access,
)
from iam.application.observability import AccessGateProbe
from iam.application.value_objects import Principal
from iam.domain.value_objects import UserId

NOW = datetime(2026, 3, 1, tzinfo=UTC)


def make_principal(verified: bool = True, deleted: bool = False) -> Principal:
    return Principal(
        user_id=UserId.generate(),
        username="alice",
        email="alice@example.com",
        email_verified_at=NOW if verified else None,
        deleted_at=NOW if deleted else None,
    )


@pytest.fixture
def mock_probe():
    return create_autospec(AccessGateProbe, instance=True)


class TestEvaluateAccess:
    def test_missing_principal_is_unauthenticated(self, mock_probe):
        assert evaluate_access(None, probe=mock_probe) is UNAUTHENTICATED
        mock_probe.access_denied.assert_called_once_with(
            reason="unauthenticated", user_id=None
        )

    def test_unverified_is_refused(self, mock_probe):
        principal = make_principal(verified=False)

        assert evaluate_access(principal, probe=mock_probe) is EMAIL_NOT_VERIFIED

    def test_unverified_takes_precedence_over_deleted(self, mock_probe):
        principal = make_principal(verified=False, deleted=True)

        assert evaluate_access(principal, probe=mock_probe) is EMAIL_NOT_VERIFIED

    def test_verified_but_deleted_is_deactivated(self, mock_probe):
        principal = make_principal(verified=True, deleted=True)

        assert evaluate_access(principal, probe=mock_probe) is ACCOUNT_DEACTIVATED
        mock_probe.access_denied.assert_called_once_with(
            reason="account_deactivated", user_id=principal.user_id.value
        )

    def test_verified_and_live_is_admitted(self, mock_probe):
        principal = make_principal()

        assert evaluate_access(principal, probe=mock_probe) is None
        mock_probe.access_granted.assert_called_once_with(
            user_id=principal.user_id.value
        )
        mock_probe.access_denied.assert_not_called()

    def test_works_without_explicit_probe(self):
        assert evaluate_access(make_principal()) is None


class TestDenialBodies:
    def test_unauthenticated_body(self):
        assert UNAUTHENTICATED.status_code == 401
        assert UNAUTHENTICATED.body() == {"message": "Unauthenticated."}

    def test_email_not_verified_body(self):
        assert EMAIL_NOT_VERIFIED.status_code == 403
        assert EMAIL_NOT_VERIFIED.body() == {
            "message": "Your email address is not verified.",
            "error": "email_not_verified",
        }

    def test_account_deactivated_body(self):
        assert ACCOUNT_DEACTIVATED.status_code == 403
        assert ACCOUNT_DEACTIVATED.body() == {
            "message": "Your account has been deactivated.",
            "error": "account_deactivated",
        }


class TestAccessDeniedError:
    @pytest.mark.parametrize(
        ("denial", "error_type"),
        [
            (UNAUTHENTICATED, UnauthenticatedError),
            (EMAIL_NOT_VERIFIED, EmailNotVerifiedError),
            (ACCOUNT_DEACTIVATED, AccountDeactivatedError),
        ],
    )
    def test_from_denial_picks_subclass(self, denial, error_type):
        error = AccessDeniedError.from_denial(denial)

        assert type(error) is error_type
        assert error.denial is denial
        assert str(error) == denial.message
