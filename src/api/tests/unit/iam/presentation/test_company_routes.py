"""Unit tests for the /v1/companies routes."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from iam.domain.aggregates import Company
from iam.ports.exceptions import (
    CompanyNotFoundError,
    NotDeletedError,
    UnauthorizedError,
)
from iam.ports.repositories import Page


@pytest.fixture
def company() -> Company:
    return Company.create(name="Acme Corp", slug="acme-corp")


class TestAccessGate:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("GET", "/v1/companies"),
            ("POST", "/v1/companies"),
            ("GET", "/v1/companies/statistics"),
            ("GET", "/v1/companies/acme-corp"),
            ("PUT", "/v1/companies/acme-corp"),
            ("DELETE", "/v1/companies/acme-corp"),
            ("POST", "/v1/companies/01J0000000000000000000000/restore"),
            ("DELETE", "/v1/companies/01J0000000000000000000000/force"),
        ],
    )
    def test_requires_credential(
        self,
        anonymous_client: TestClient,
        mock_company_service: AsyncMock,
        method: str,
        path: str,
    ) -> None:
        response = anonymous_client.request(method, path, json={"name": "X"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert mock_company_service.mock_calls == []


class TestCompanyRoutes:
    def test_list_envelope(
        self,
        client: TestClient,
        mock_company_service: AsyncMock,
        company: Company,
    ) -> None:
        mock_company_service.list_companies.return_value = Page(
            items=[company], total=1, page=1, per_page=15
        )

        response = client.get("/v1/companies", params={"search": "acme"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["data"][0]["slug"] == "acme-corp"
        assert body["meta"]["total"] == 1
        assert mock_company_service.list_companies.call_args.kwargs["search"] == "acme"

    def test_rejects_unknown_sort_field(
        self, client: TestClient, mock_company_service: AsyncMock
    ) -> None:
        response = client.get("/v1/companies", params={"sort_by": "email"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_returns_201_with_slug(
        self,
        client: TestClient,
        mock_company_service: AsyncMock,
        company: Company,
        principal,
    ) -> None:
        mock_company_service.create.return_value = company

        response = client.post("/v1/companies", json={"name": "Acme Corp"})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["slug"] == "acme-corp"
        mock_company_service.create.assert_awaited_once_with(
            name="Acme Corp", actor=principal
        )

    def test_show_missing_is_404(
        self, client: TestClient, mock_company_service: AsyncMock
    ) -> None:
        mock_company_service.get_by_slug.side_effect = CompanyNotFoundError("missing")

        response = client.get("/v1/companies/nope")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.parametrize("method", ["PUT", "PATCH"])
    def test_rename(
        self,
        client: TestClient,
        mock_company_service: AsyncMock,
        company: Company,
        method: str,
    ) -> None:
        company.rename("Acme Holdings")
        mock_company_service.update.return_value = company

        response = client.request(
            method, "/v1/companies/acme-corp", json={"name": "Acme Holdings"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Acme Holdings"
        assert response.json()["slug"] == "acme-corp"

    def test_update_without_grant_is_403(
        self, client: TestClient, mock_company_service: AsyncMock
    ) -> None:
        mock_company_service.update.side_effect = UnauthorizedError("no access")

        response = client.put("/v1/companies/acme-corp", json={"name": "Mine"})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"message": "This action is unauthorized."}

    def test_delete_main_is_403(
        self, client: TestClient, mock_company_service: AsyncMock
    ) -> None:
        mock_company_service.delete.side_effect = UnauthorizedError("main")

        response = client.delete("/v1/companies/main")

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete_returns_204(
        self, client: TestClient, mock_company_service: AsyncMock
    ) -> None:
        response = client.delete("/v1/companies/acme-corp")

        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_restore_live_company_is_409(
        self, client: TestClient, mock_company_service: AsyncMock, company: Company
    ) -> None:
        mock_company_service.restore.side_effect = NotDeletedError("live")

        response = client.post(f"/v1/companies/{company.id.value}/restore")

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_restore_returns_company(
        self, client: TestClient, mock_company_service: AsyncMock, company: Company
    ) -> None:
        mock_company_service.restore.return_value = company

        response = client.post(f"/v1/companies/{company.id.value}/restore")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == company.id.value

    def test_force_delete_missing_is_404(
        self, client: TestClient, mock_company_service: AsyncMock
    ) -> None:
        mock_company_service.force_delete.side_effect = CompanyNotFoundError("x")

        response = client.delete("/v1/companies/01J0000000000000000000000/force")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_statistics(
        self, client: TestClient, mock_company_service: AsyncMock
    ) -> None:
        counts = {
            "total": 4,
            "deleted": 1,
            "created_today": 0,
            "created_this_week": 2,
            "created_this_month": 3,
        }
        mock_company_service.get_statistics.return_value = counts

        response = client.get("/v1/companies/statistics")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == counts

    def test_response_carries_deleted_at(
        self, client: TestClient, mock_company_service: AsyncMock, company: Company
    ) -> None:
        company.deleted_at = datetime(2026, 2, 1, tzinfo=UTC)
        mock_company_service.get_by_slug.return_value = company

        response = client.get("/v1/companies/acme-corp")

        assert response.json()["deleted_at"].startswith("2026-02-01")
