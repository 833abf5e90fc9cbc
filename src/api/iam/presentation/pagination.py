"""Pagination envelope shared by list endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.ports.repositories import Page


class PaginationMeta(BaseModel):
    """Position of a page within a listing."""

    current_page: int = Field(..., description="One-based page number")
    per_page: int = Field(..., description="Page size")
    total: int = Field(..., description="Total number of matching rows")
    last_page: int = Field(..., description="Number of the last page")

    @classmethod
    def from_page(cls, page: Page) -> PaginationMeta:
        return cls(
            current_page=page.page,
            per_page=page.per_page,
            total=page.total,
            last_page=page.last_page,
        )
