"""Dependency injection for company management."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    CompanyServiceProbe,
    DefaultCompanyServiceProbe,
)
from iam.application.services import CompanyService
from iam.infrastructure.company_repository import AccessRepository, CompanyRepository
from infrastructure.database.dependencies import get_write_session


def get_company_service_probe() -> CompanyServiceProbe:
    """Get CompanyServiceProbe instance.

    Returns:
        DefaultCompanyServiceProbe instance for observability
    """
    return DefaultCompanyServiceProbe()


def get_company_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> CompanyRepository:
    """Get CompanyRepository instance."""
    return CompanyRepository(session=session)


def get_access_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> AccessRepository:
    """Get AccessRepository instance."""
    return AccessRepository(session=session)


def get_company_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    company_repo: Annotated[CompanyRepository, Depends(get_company_repository)],
    access_repo: Annotated[AccessRepository, Depends(get_access_repository)],
    probe: Annotated[CompanyServiceProbe, Depends(get_company_service_probe)],
) -> CompanyService:
    """Get CompanyService instance.

    Args:
        session: Database session for transaction management
        company_repo: Company repository (shares session via FastAPI dependency caching)
        access_repo: Access grant repository (same session)
        probe: Company service probe for observability

    Returns:
        CompanyService instance
    """
    return CompanyService(
        session=session,
        company_repository=company_repo,
        access_repository=access_repo,
        probe=probe,
    )
