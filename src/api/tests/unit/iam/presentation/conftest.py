"""Fixtures for IAM route tests.

Routes are mounted on a bare FastAPI app with the IAM exception handlers
installed. Services are AsyncMocks and the bearer token resolution is
overridden, so no database is touched.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from iam.application.services import AuthService, CompanyService, UserService
from iam.application.value_objects import Principal
from iam.dependencies.auth import get_auth_service
from iam.dependencies.authentication import resolve_principal
from iam.dependencies.company import get_company_service
from iam.dependencies.user import get_user_service
from iam.domain.value_objects import AccessTokenId


@pytest.fixture
def mock_user_service() -> AsyncMock:
    return AsyncMock(spec=UserService)


@pytest.fixture
def mock_company_service() -> AsyncMock:
    return AsyncMock(spec=CompanyService)


@pytest.fixture
def mock_auth_service() -> AsyncMock:
    return AsyncMock(spec=AuthService)


@pytest.fixture
def principal(verified_user) -> Principal:
    """The caller, resolved from a valid token of a verified user."""
    return Principal.from_user(verified_user, token_id=AccessTokenId.generate())


@pytest.fixture
def app(
    mock_user_service: AsyncMock,
    mock_company_service: AsyncMock,
    mock_auth_service: AsyncMock,
    principal: Principal,
) -> FastAPI:
    """FastAPI app with the IAM router and mocked dependencies."""
    from iam.presentation import register_exception_handlers, router

    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(router)

    app.dependency_overrides[get_user_service] = lambda: mock_user_service
    app.dependency_overrides[get_company_service] = lambda: mock_company_service
    app.dependency_overrides[get_auth_service] = lambda: mock_auth_service
    app.dependency_overrides[resolve_principal] = lambda: principal
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def anonymous_client(app: FastAPI) -> TestClient:
    """Client whose requests carry no valid credential."""
    app.dependency_overrides[resolve_principal] = lambda: None
    return TestClient(app)
