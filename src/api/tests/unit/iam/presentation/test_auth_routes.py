"""Unit tests for the /v1/auth routes."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime
from unittest.mock import AsyncMock

from fastapi import status
from fastapi.testclient import TestClient

from iam.application.value_objects import IssuedToken
from iam.dependencies.authentication import resolve_principal
from iam.domain.aggregates import User
from iam.domain.value_objects import AccessTokenId
from iam.ports.exceptions import DuplicateEmailError, InvalidCredentialsError

PLAINTEXT = "adm_plaintexttokenvalue"  # gitleaks:allow


def _issued() -> IssuedToken:
    return IssuedToken(token_id=AccessTokenId.generate(), plaintext=PLAINTEXT)


class TestRegister:
    """Tests for POST /v1/auth/register."""

    def test_registers_without_credential(
        self,
        anonymous_client: TestClient,
        mock_auth_service: AsyncMock,
    ) -> None:
        unverified = User.create(
            name="Carol New",
            email="carol@example.com",
            username="carol-new",
            password_hash="hashed",
        )
        mock_auth_service.register.return_value = (unverified, _issued())

        response = anonymous_client.post(
            "/v1/auth/register",
            json={
                "name": "Carol New",
                "email": "carol@example.com",
                "password": "secret-password",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["access_token"] == PLAINTEXT
        assert body["token_type"] == "Bearer"
        assert body["user"]["username"] == "carol-new"
        assert body["user"]["email_verified_at"] is None
        assert "password_hash" not in body["user"]
        mock_auth_service.register.assert_awaited_once_with(
            name="Carol New", email="carol@example.com", password="secret-password"
        )

    def test_duplicate_email_returns_422(
        self,
        anonymous_client: TestClient,
        mock_auth_service: AsyncMock,
    ) -> None:
        mock_auth_service.register.side_effect = DuplicateEmailError("taken")

        response = anonymous_client.post(
            "/v1/auth/register",
            json={
                "name": "Alice Admin",
                "email": "alice@example.com",
                "password": "secret-password",
            },
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json() == {
            "message": "The email has already been taken.",
            "errors": {"email": ["The email has already been taken."]},
        }

    def test_short_password_is_rejected(
        self,
        anonymous_client: TestClient,
        mock_auth_service: AsyncMock,
    ) -> None:
        response = anonymous_client.post(
            "/v1/auth/register",
            json={"name": "X", "email": "x@example.com", "password": "short"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_auth_service.register.assert_not_awaited()

    def test_password_limit_counts_bytes(
        self,
        anonymous_client: TestClient,
        mock_auth_service: AsyncMock,
    ) -> None:
        # 72 characters, 144 UTF-8 bytes
        response = anonymous_client.post(
            "/v1/auth/register",
            json={"name": "X", "email": "x@example.com", "password": "пароль" * 12},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "72 bytes" in response.text
        mock_auth_service.register.assert_not_awaited()


class TestLogin:
    """Tests for POST /v1/auth/login."""

    def test_returns_token_and_user(
        self,
        anonymous_client: TestClient,
        mock_auth_service: AsyncMock,
        verified_user: User,
    ) -> None:
        mock_auth_service.login.return_value = (verified_user, _issued())

        response = anonymous_client.post(
            "/v1/auth/login",
            json={"email": "alice@example.com", "password": "secret-password"},
            headers={"User-Agent": "pytest-agent"},
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["access_token"] == PLAINTEXT
        assert body["user"]["id"] == verified_user.id.value
        kwargs = mock_auth_service.login.call_args.kwargs
        assert kwargs["email"] == "alice@example.com"
        assert kwargs["user_agent"] == "pytest-agent"
        assert kwargs["ip_address"]

    def test_bad_credentials_return_422_on_email(
        self,
        anonymous_client: TestClient,
        mock_auth_service: AsyncMock,
    ) -> None:
        mock_auth_service.login.side_effect = InvalidCredentialsError("nope")

        response = anonymous_client.post(
            "/v1/auth/login",
            json={"email": "alice@example.com", "password": "wrong-password"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["errors"] == {
            "email": ["The provided credentials are incorrect."]
        }


class TestGatedAuthRoutes:
    """Tests for the routes that require an active user."""

    def test_me_returns_current_user(
        self,
        client: TestClient,
        mock_user_service: AsyncMock,
        verified_user: User,
        principal,
    ) -> None:
        mock_user_service.get_by_id.return_value = verified_user

        response = client.get("/v1/auth/me")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["username"] == "alice-admin"
        mock_user_service.get_by_id.assert_awaited_once_with(principal.user_id)

    def test_logout(
        self, client: TestClient, mock_auth_service: AsyncMock, principal
    ) -> None:
        response = client.post("/v1/auth/logout")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Logged out successfully"}
        assert mock_auth_service.logout.call_args.args[0] == principal

    def test_logout_all(self, client: TestClient, mock_auth_service: AsyncMock) -> None:
        response = client.post("/v1/auth/logout-all")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "message": "Logged out from all devices successfully"
        }
        mock_auth_service.logout_all.assert_awaited_once()

    def test_refresh_returns_new_token(
        self, client: TestClient, mock_auth_service: AsyncMock
    ) -> None:
        mock_auth_service.refresh.return_value = _issued()

        response = client.post("/v1/auth/refresh")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "message": "Token refreshed successfully",
            "access_token": PLAINTEXT,
            "token_type": "Bearer",
        }

    def test_unauthenticated_gets_401(
        self, anonymous_client: TestClient, mock_auth_service: AsyncMock
    ) -> None:
        response = anonymous_client.post("/v1/auth/logout")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Unauthenticated."}
        assert response.headers["www-authenticate"] == "Bearer"
        mock_auth_service.logout.assert_not_awaited()

    def test_unverified_user_gets_403(
        self, app, mock_auth_service: AsyncMock, principal
    ) -> None:
        app.dependency_overrides[resolve_principal] = lambda: replace(
            principal, email_verified_at=None
        )

        response = TestClient(app).post("/v1/auth/refresh")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {
            "message": "Your email address is not verified.",
            "error": "email_not_verified",
        }
        mock_auth_service.refresh.assert_not_awaited()

    def test_deleted_user_gets_403(self, app, principal) -> None:
        app.dependency_overrides[resolve_principal] = lambda: replace(
            principal, deleted_at=datetime(2026, 2, 1, tzinfo=UTC)
        )

        response = TestClient(app).get("/v1/auth/me")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {
            "message": "Your account has been deactivated.",
            "error": "account_deactivated",
        }
