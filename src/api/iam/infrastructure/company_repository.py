"""PostgreSQL implementations of ICompanyRepository and IAccessRepository."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Access, Company
from iam.domain.value_objects import CompanyId, UserId
from iam.infrastructure.models import AccessModel, CompanyModel
from iam.infrastructure.observability import (
    CompanyRepositoryProbe,
    DefaultCompanyRepositoryProbe,
)
from iam.ports.repositories import (
    IAccessRepository,
    ICompanyRepository,
    Page,
    SortDirection,
)

_SORT_COLUMNS: dict[str, Any] = {
    "name": CompanyModel.name,
    "slug": CompanyModel.slug,
    "created_at": CompanyModel.created_at,
}


class CompanyRepository(ICompanyRepository):
    """PostgreSQL-backed repository for Company aggregates."""

    def __init__(
        self, session: AsyncSession, probe: CompanyRepositoryProbe | None = None
    ) -> None:
        self._session = session
        self._probe = probe or DefaultCompanyRepositoryProbe()

    async def save(self, company: Company) -> None:
        """Persist a company aggregate (insert or update)."""
        model = await self._get_model(company.id.value, include_deleted=True)

        if model:
            model.name = company.name
            model.deleted_at = company.deleted_at
        else:
            model = CompanyModel(
                id=company.id.value,
                name=company.name,
                slug=company.slug,
                deleted_at=company.deleted_at,
            )
            self._session.add(model)

        await self._session.flush()
        self._probe.company_saved(company.id.value, company.slug)

    async def get_by_id(
        self, company_id: CompanyId, include_deleted: bool = False
    ) -> Company | None:
        model = await self._get_model(company_id.value, include_deleted)
        if model is None:
            self._probe.company_not_found(company_id.value)
            return None
        return self._to_aggregate(model)

    async def get_by_slug(self, slug: str) -> Company | None:
        stmt = select(CompanyModel).where(
            CompanyModel.slug == slug, CompanyModel.deleted_at.is_(None)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            self._probe.company_not_found(slug)
            return None
        return self._to_aggregate(model)

    async def get_by_name(self, name: str) -> Company | None:
        stmt = (
            select(CompanyModel)
            .where(CompanyModel.name == name, CompanyModel.deleted_at.is_(None))
            .order_by(CompanyModel.created_at)
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_aggregate(model) if model else None

    async def slug_exists(self, slug: str) -> bool:
        stmt = select(func.count()).select_from(CompanyModel).where(
            CompanyModel.slug == slug
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def list(
        self,
        search: str | None,
        sort_by: str,
        sort_direction: SortDirection,
        per_page: int,
        page: int,
    ) -> Page[Company]:
        """List live companies, filtered and ordered, one page at a time."""
        stmt: Select[Any] = select(CompanyModel).where(
            CompanyModel.deleted_at.is_(None)
        )
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(CompanyModel.name.ilike(pattern), CompanyModel.slug.ilike(pattern))
            )

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self._session.execute(count_stmt)).scalar_one()

        column = _SORT_COLUMNS[sort_by]
        order = column.desc() if sort_direction == "desc" else column.asc()
        stmt = stmt.order_by(order).limit(per_page).offset((page - 1) * per_page)

        result = await self._session.execute(stmt)
        companies = [self._to_aggregate(model) for model in result.scalars().all()]
        return Page(items=companies, total=total, page=page, per_page=per_page)

    async def count(
        self, since: datetime | None = None, deleted: bool = False
    ) -> int:
        stmt = select(func.count()).select_from(CompanyModel)
        if deleted:
            stmt = stmt.where(CompanyModel.deleted_at.is_not(None))
        else:
            stmt = stmt.where(CompanyModel.deleted_at.is_(None))
        if since is not None:
            stmt = stmt.where(CompanyModel.created_at >= since)

        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def delete(self, company: Company) -> None:
        """Permanently remove a company row. Access grants cascade."""
        model = await self._get_model(company.id.value, include_deleted=True)
        if model is None:
            self._probe.company_not_found(company.id.value)
            return

        await self._session.delete(model)
        await self._session.flush()
        self._probe.company_removed(company.id.value)

    async def _get_model(
        self, company_id: str, include_deleted: bool
    ) -> CompanyModel | None:
        stmt = select(CompanyModel).where(CompanyModel.id == company_id)
        if not include_deleted:
            stmt = stmt.where(CompanyModel.deleted_at.is_(None))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_aggregate(self, model: CompanyModel) -> Company:
        return Company(
            id=CompanyId(value=model.id),
            name=model.name,
            slug=model.slug,
            deleted_at=model.deleted_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class AccessRepository(IAccessRepository):
    """PostgreSQL-backed repository for access grants."""

    def __init__(
        self, session: AsyncSession, probe: CompanyRepositoryProbe | None = None
    ) -> None:
        self._session = session
        self._probe = probe or DefaultCompanyRepositoryProbe()

    async def save(self, access: Access) -> None:
        self._session.add(
            AccessModel(
                id=access.id.value,
                user_id=access.user_id.value,
                company_id=access.company_id.value,
            )
        )
        await self._session.flush()
        self._probe.access_granted(access.user_id.value, access.company_id.value)

    async def exists(self, user_id: UserId, company_id: CompanyId) -> bool:
        stmt = select(func.count()).select_from(AccessModel).where(
            AccessModel.user_id == user_id.value,
            AccessModel.company_id == company_id.value,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0
