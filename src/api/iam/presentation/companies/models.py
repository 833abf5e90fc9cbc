"""Pydantic models for company API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.domain.aggregates import Company
from iam.presentation.pagination import PaginationMeta


class CreateCompanyRequest(BaseModel):
    """Request model for creating a company."""

    name: str = Field(..., description="Company name", min_length=1, max_length=255)


class UpdateCompanyRequest(BaseModel):
    """Request model for renaming a company. The slug is kept."""

    name: str = Field(..., description="Company name", min_length=1, max_length=255)


class CompanyResponse(BaseModel):
    """Response model for company."""

    id: str = Field(..., description="Company ID (ULID format)")
    name: str = Field(..., description="Company name")
    slug: str = Field(..., description="Slug (route key)")
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @classmethod
    def from_domain(cls, company: Company) -> CompanyResponse:
        """Convert domain Company aggregate to API response."""
        return cls(
            id=company.id.value,
            name=company.name,
            slug=company.slug,
            created_at=company.created_at,
            updated_at=company.updated_at,
            deleted_at=company.deleted_at,
        )


class CompanyListResponse(BaseModel):
    """One page of companies."""

    data: list[CompanyResponse]
    meta: PaginationMeta


class CompanyStatisticsResponse(BaseModel):
    """Company counts. All counts except `deleted` cover live companies only."""

    total: int
    deleted: int
    created_today: int
    created_this_week: int
    created_this_month: int
