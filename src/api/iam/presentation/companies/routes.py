"""HTTP routes for company management."""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.services import CompanyService
from iam.dependencies.authentication import ActiveUser
from iam.dependencies.company import get_company_service
from iam.ports.exceptions import CompanyNotFoundError, NotDeletedError
from iam.presentation.companies.models import (
    CompanyListResponse,
    CompanyResponse,
    CompanyStatisticsResponse,
    CreateCompanyRequest,
    UpdateCompanyRequest,
)
from iam.presentation.pagination import PaginationMeta

router = APIRouter(prefix="/companies", tags=["companies"])

CompanySortField = Literal["name", "slug", "created_at"]


def _not_found(e: CompanyNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/statistics", response_model=CompanyStatisticsResponse)
async def company_statistics(
    _: ActiveUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> CompanyStatisticsResponse:
    """Count companies by state and creation period."""
    return CompanyStatisticsResponse(**await service.get_statistics())


@router.post("/{company_id}/restore", response_model=CompanyResponse)
async def restore_company(
    company_id: str,
    principal: ActiveUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> CompanyResponse:
    """Restore a soft-deleted company.

    Raises:
        HTTPException: 404 if the company does not exist
        HTTPException: 409 if the company is not soft deleted
        UnauthorizedError: Rendered as 403 without an access grant
    """
    try:
        company = await service.restore(company_id, actor=principal)
    except CompanyNotFoundError as e:
        raise _not_found(e) from e
    except NotDeletedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    return CompanyResponse.from_domain(company)


@router.delete("/{company_id}/force", status_code=status.HTTP_204_NO_CONTENT)
async def force_delete_company(
    company_id: str,
    principal: ActiveUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> None:
    """Permanently delete a company. The Main company cannot be removed."""
    try:
        await service.force_delete(company_id, actor=principal)
    except CompanyNotFoundError as e:
        raise _not_found(e) from e


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    _: ActiveUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
    search: str | None = None,
    sort_by: CompanySortField = "created_at",
    sort_direction: Literal["asc", "desc"] = "asc",
    per_page: Annotated[int, Query(ge=1, le=100)] = 15,
    page: Annotated[int, Query(ge=1)] = 1,
) -> CompanyListResponse:
    """List live companies, with search, sorting and pagination."""
    try:
        result = await service.list_companies(
            search=search,
            sort_by=sort_by,
            sort_direction=sort_direction,
            per_page=per_page,
            page=page,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        ) from e

    return CompanyListResponse(
        data=[CompanyResponse.from_domain(c) for c in result.items],
        meta=PaginationMeta.from_page(result),
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CompanyResponse)
async def create_company(
    request: CreateCompanyRequest,
    principal: ActiveUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> CompanyResponse:
    """Create a company. The creator is granted access to it.

    Args:
        request: Company creation request
        principal: Authenticated and verified user
        service: Company service for orchestration

    Returns:
        The created company with its generated slug
    """
    company = await service.create(name=request.name, actor=principal)
    return CompanyResponse.from_domain(company)


@router.get("/{slug}", response_model=CompanyResponse)
async def get_company(
    slug: str,
    _: ActiveUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> CompanyResponse:
    """Get a live company by slug."""
    try:
        company = await service.get_by_slug(slug)
    except CompanyNotFoundError as e:
        raise _not_found(e) from e

    return CompanyResponse.from_domain(company)


@router.api_route("/{slug}", methods=["PUT", "PATCH"], response_model=CompanyResponse)
async def update_company(
    slug: str,
    request: UpdateCompanyRequest,
    principal: ActiveUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> CompanyResponse:
    """Rename a company. Requires an access grant."""
    try:
        company = await service.update(slug, name=request.name, actor=principal)
    except CompanyNotFoundError as e:
        raise _not_found(e) from e

    return CompanyResponse.from_domain(company)


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_company(
    slug: str,
    principal: ActiveUser,
    service: Annotated[CompanyService, Depends(get_company_service)],
) -> None:
    """Soft delete a company. The Main company cannot be deleted."""
    try:
        await service.delete(slug, actor=principal)
    except CompanyNotFoundError as e:
        raise _not_found(e) from e
