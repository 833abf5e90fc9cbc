"""Unit tests for the /v1/users routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from iam.domain.aggregates import User
from iam.ports.exceptions import (
    DuplicateEmailError,
    NotDeletedError,
    UnauthorizedError,
    UserNotFoundError,
)
from iam.ports.repositories import Page


class TestAccessGate:
    """Every user route is behind the access gate."""

    @pytest.mark.parametrize(
        "method, path",
        [
            ("GET", "/v1/users"),
            ("POST", "/v1/users"),
            ("GET", "/v1/users/statistics"),
            ("GET", "/v1/users/alice-admin"),
            ("PUT", "/v1/users/alice-admin"),
            ("PATCH", "/v1/users/alice-admin"),
            ("DELETE", "/v1/users/alice-admin"),
            ("POST", "/v1/users/01J0000000000000000000000/restore"),
            ("DELETE", "/v1/users/01J0000000000000000000000/force"),
        ],
    )
    def test_requires_credential(
        self,
        anonymous_client: TestClient,
        mock_user_service: AsyncMock,
        method: str,
        path: str,
    ) -> None:
        response = anonymous_client.request(method, path, json={})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"message": "Unauthenticated."}
        assert mock_user_service.mock_calls == []


class TestListUsers:
    def test_returns_page_envelope(
        self,
        client: TestClient,
        mock_user_service: AsyncMock,
        verified_user: User,
        other_user: User,
    ) -> None:
        mock_user_service.list_users.return_value = Page(
            items=[verified_user, other_user], total=32, page=2, per_page=15
        )

        response = client.get(
            "/v1/users",
            params={"search": "a", "sort_by": "name", "sort_direction": "desc", "page": 2},
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert [u["username"] for u in body["data"]] == ["alice-admin", "bob-builder"]
        assert body["meta"] == {
            "current_page": 2,
            "per_page": 15,
            "total": 32,
            "last_page": 3,
        }
        mock_user_service.list_users.assert_awaited_once_with(
            search="a", sort_by="name", sort_direction="desc", per_page=15, page=2
        )

    def test_defaults(self, client: TestClient, mock_user_service: AsyncMock) -> None:
        mock_user_service.list_users.return_value = Page(
            items=[], total=0, page=1, per_page=15
        )

        response = client.get("/v1/users")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["meta"]["last_page"] == 1
        mock_user_service.list_users.assert_awaited_once_with(
            search=None,
            sort_by="created_at",
            sort_direction="asc",
            per_page=15,
            page=1,
        )

    @pytest.mark.parametrize(
        "params",
        [
            {"sort_by": "password_hash"},
            {"sort_direction": "sideways"},
            {"per_page": 101},
            {"page": 0},
        ],
    )
    def test_rejects_invalid_query(
        self, client: TestClient, mock_user_service: AsyncMock, params
    ) -> None:
        response = client.get("/v1/users", params=params)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_user_service.list_users.assert_not_awaited()


class TestCreateUser:
    def test_creates_verified_user(
        self, client: TestClient, mock_user_service: AsyncMock, other_user: User
    ) -> None:
        mock_user_service.create.return_value = other_user

        response = client.post(
            "/v1/users",
            json={
                "name": "Bob Builder",
                "email": "bob@example.com",
                "password": "secret-password",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["username"] == "bob-builder"
        assert mock_user_service.create.call_args.kwargs["email_verified"] is True

    def test_duplicate_email(
        self, client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        mock_user_service.create.side_effect = DuplicateEmailError("taken")

        response = client.post(
            "/v1/users",
            json={
                "name": "Bob Builder",
                "email": "bob@example.com",
                "password": "secret-password",
            },
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert "email" in response.json()["errors"]

    def test_multibyte_password_over_bcrypt_limit(
        self, client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        response = client.post(
            "/v1/users",
            json={
                "name": "Bob Builder",
                "email": "bob@example.com",
                "password": "пароль" * 12,
            },
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_user_service.create.assert_not_awaited()

    def test_multibyte_password_at_bcrypt_limit(
        self, client: TestClient, mock_user_service: AsyncMock, other_user: User
    ) -> None:
        mock_user_service.create.return_value = other_user

        response = client.post(
            "/v1/users",
            json={
                "name": "Bob Builder",
                "email": "bob@example.com",
                "password": "пароль" * 6,
            },
        )

        assert response.status_code == status.HTTP_201_CREATED


class TestShowUser:
    def test_returns_user(
        self, client: TestClient, mock_user_service: AsyncMock, other_user: User
    ) -> None:
        mock_user_service.get_by_username.return_value = other_user

        response = client.get("/v1/users/bob-builder")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["email"] == "bob@example.com"
        mock_user_service.get_by_username.assert_awaited_once_with("bob-builder")

    def test_missing_user_is_404(
        self, client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        mock_user_service.get_by_username.side_effect = UserNotFoundError("missing")

        response = client.get("/v1/users/ghost")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestUpdateUser:
    @pytest.mark.parametrize("method", ["PUT", "PATCH"])
    def test_passes_only_provided_fields(
        self,
        client: TestClient,
        mock_user_service: AsyncMock,
        verified_user: User,
        principal,
        method: str,
    ) -> None:
        mock_user_service.update.return_value = verified_user

        response = client.request(
            method, "/v1/users/alice-admin", json={"name": "Alice A."}
        )

        assert response.status_code == status.HTTP_200_OK
        mock_user_service.update.assert_awaited_once_with(
            "alice-admin", {"name": "Alice A."}, actor=principal
        )

    def test_other_user_is_forbidden(
        self, client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        mock_user_service.update.side_effect = UnauthorizedError("not yours")

        response = client.patch("/v1/users/bob-builder", json={"name": "Hacked"})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"message": "This action is unauthorized."}

    def test_password_change_over_bcrypt_limit(
        self, client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        response = client.patch(
            "/v1/users/alice-admin", json={"password": "пароль" * 12}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_user_service.update.assert_not_awaited()


class TestDeleteUser:
    def test_soft_delete_returns_204(
        self, client: TestClient, mock_user_service: AsyncMock, principal
    ) -> None:
        response = client.delete("/v1/users/bob-builder")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        mock_user_service.delete.assert_awaited_once_with(
            "bob-builder", actor=principal
        )

    def test_self_delete_is_forbidden(
        self, client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        mock_user_service.delete.side_effect = UnauthorizedError("self")

        response = client.delete("/v1/users/alice-admin")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_force_delete_returns_204(
        self, client: TestClient, mock_user_service: AsyncMock, other_user: User
    ) -> None:
        response = client.delete(f"/v1/users/{other_user.id.value}/force")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert mock_user_service.force_delete.call_args.args[0] == other_user.id.value

    def test_force_delete_missing_is_404(
        self, client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        mock_user_service.force_delete.side_effect = UserNotFoundError("missing")

        response = client.delete("/v1/users/01J0000000000000000000000/force")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestRestoreUser:
    def test_restores(
        self, client: TestClient, mock_user_service: AsyncMock, other_user: User
    ) -> None:
        mock_user_service.restore.return_value = other_user

        response = client.post(f"/v1/users/{other_user.id.value}/restore")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["deleted_at"] is None

    def test_live_user_is_conflict(
        self, client: TestClient, mock_user_service: AsyncMock, other_user: User
    ) -> None:
        mock_user_service.restore.side_effect = NotDeletedError("not deleted")

        response = client.post(f"/v1/users/{other_user.id.value}/restore")

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_missing_is_404(
        self, client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        mock_user_service.restore.side_effect = UserNotFoundError("missing")

        response = client.post("/v1/users/01J0000000000000000000000/restore")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestUserStatistics:
    def test_returns_counts(
        self, client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        counts = {
            "total": 10,
            "active": 7,
            "inactive": 3,
            "deleted": 2,
            "registered_today": 1,
            "registered_this_week": 4,
            "registered_this_month": 9,
        }
        mock_user_service.get_statistics.return_value = counts

        response = client.get("/v1/users/statistics")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == counts
        mock_user_service.get_by_username.assert_not_awaited()
