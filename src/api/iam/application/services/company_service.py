"""Company application service for IAM bounded context.

Orchestrates company management and the access grants that control who
may change a company.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    CompanyServiceProbe,
    DefaultCompanyServiceProbe,
)
from iam.application.policies import CompanyPolicy
from iam.application.services.statistics import PeriodStarts
from iam.application.slugs import unique_slug
from iam.application.value_objects import Principal
from iam.domain.aggregates import Access, Company
from iam.domain.value_objects import CompanyId
from iam.ports.exceptions import CompanyNotFoundError
from iam.ports.repositories import (
    IAccessRepository,
    ICompanyRepository,
    Page,
    SortDirection,
)

COMPANY_SORT_FIELDS = ("name", "slug", "created_at")
DEFAULT_PER_PAGE = 15
MAX_PER_PAGE = 100


class CompanyService:
    """Application service for company management.

    Manages database transactions. Every change is made on behalf of an
    actor and checked against the company policy.
    """

    def __init__(
        self,
        session: AsyncSession,
        company_repository: ICompanyRepository,
        access_repository: IAccessRepository,
        policy: CompanyPolicy | None = None,
        probe: CompanyServiceProbe | None = None,
    ):
        """Initialize CompanyService with dependencies.

        Args:
            session: Database session for transaction management
            company_repository: Repository for company persistence
            access_repository: Repository for access grants
            policy: Authorization rules (defaults to grant-based policy)
            probe: Optional domain probe for observability
        """
        self._session = session
        self._company_repository = company_repository
        self._access_repository = access_repository
        self._policy = policy or CompanyPolicy(access_repository)
        self._probe = probe or DefaultCompanyServiceProbe()

    async def list_companies(
        self,
        search: str | None = None,
        sort_by: str = "created_at",
        sort_direction: SortDirection = "asc",
        per_page: int = DEFAULT_PER_PAGE,
        page: int = 1,
    ) -> Page[Company]:
        """List live companies.

        Raises:
            ValueError: If sort_by is not sortable
        """
        if sort_by not in COMPANY_SORT_FIELDS:
            raise ValueError(f"Cannot sort companies by '{sort_by}'")

        async with self._session.begin():
            return await self._company_repository.list(
                search=search or None,
                sort_by=sort_by,
                sort_direction=sort_direction,
                per_page=min(max(per_page, 1), MAX_PER_PAGE),
                page=max(page, 1),
            )

    async def get_by_slug(self, slug: str) -> Company:
        """Retrieve a live company by slug.

        Raises:
            CompanyNotFoundError: If no live company has this slug
        """
        async with self._session.begin():
            return await self._require_by_slug(slug)

    async def create(self, name: str, actor: Principal) -> Company:
        """Create a company and grant the creator access to it."""
        try:
            async with self._session.begin():
                slug = await unique_slug(
                    name, self._company_repository.slug_exists, fallback="company"
                )
                company = Company.create(name=name, slug=slug)
                await self._company_repository.save(company)
                await self._access_repository.save(
                    Access.grant(actor.user_id, company.id)
                )

        except Exception as e:
            self._probe.company_operation_failed(operation="create", error=repr(e))
            raise

        self._probe.company_created(
            company_id=company.id.value,
            slug=company.slug,
            user_id=actor.user_id.value,
        )
        return company

    async def update(self, slug: str, name: str, actor: Principal) -> Company:
        """Rename a company. The slug is kept.

        Raises:
            CompanyNotFoundError: If no live company has this slug
            UnauthorizedError: If the actor has no access to the company
        """
        try:
            async with self._session.begin():
                company = await self._require_by_slug(slug)
                await self._policy.authorize_update(actor, company)
                company.rename(name)
                await self._company_repository.save(company)

        except Exception as e:
            self._probe.company_operation_failed(operation="update", error=repr(e))
            raise

        self._probe.company_updated(company_id=company.id.value, name=name)
        return company

    async def delete(self, slug: str, actor: Principal) -> None:
        """Soft delete a company.

        Raises:
            CompanyNotFoundError: If no live company has this slug
            UnauthorizedError: If the company is Main or the actor has no access
        """
        try:
            async with self._session.begin():
                company = await self._require_by_slug(slug)
                await self._policy.authorize_delete(actor, company)
                company.soft_delete()
                await self._company_repository.save(company)

        except Exception as e:
            self._probe.company_operation_failed(operation="delete", error=repr(e))
            raise

        self._probe.company_deleted(company_id=company.id.value)

    async def restore(self, company_id: str, actor: Principal) -> Company:
        """Restore a soft-deleted company.

        Raises:
            CompanyNotFoundError: If no company has this ID
            UnauthorizedError: If the actor has no access to the company
            NotDeletedError: If the company is not soft deleted
        """
        try:
            async with self._session.begin():
                company = await self._require_any_by_id(company_id)
                await self._policy.authorize_restore(actor, company)
                company.restore()
                await self._company_repository.save(company)

        except Exception as e:
            self._probe.company_operation_failed(operation="restore", error=repr(e))
            raise

        self._probe.company_restored(company_id=company.id.value)
        return company

    async def force_delete(self, company_id: str, actor: Principal) -> None:
        """Permanently delete a company, live or soft deleted.

        Raises:
            CompanyNotFoundError: If no company has this ID
            UnauthorizedError: If the company is Main or the actor has no access
        """
        try:
            async with self._session.begin():
                company = await self._require_any_by_id(company_id)
                await self._policy.authorize_force_delete(actor, company)
                await self._company_repository.delete(company)

        except Exception as e:
            self._probe.company_operation_failed(
                operation="force_delete", error=repr(e)
            )
            raise

        self._probe.company_permanently_deleted(company_id=company.id.value)

    async def get_statistics(self) -> dict[str, int]:
        """Count companies overall, deleted and by creation period."""
        periods = PeriodStarts.at()
        repo = self._company_repository

        async with self._session.begin():
            return {
                "total": await repo.count(),
                "deleted": await repo.count(deleted=True),
                "created_today": await repo.count(since=periods.today),
                "created_this_week": await repo.count(since=periods.this_week),
                "created_this_month": await repo.count(since=periods.this_month),
            }

    async def _require_by_slug(self, slug: str) -> Company:
        company = await self._company_repository.get_by_slug(slug)
        if company is None:
            raise CompanyNotFoundError(f"Company '{slug}' not found")
        return company

    async def _require_any_by_id(self, company_id: str) -> Company:
        try:
            parsed = CompanyId.from_string(company_id)
        except ValueError as e:
            raise CompanyNotFoundError(f"Company {company_id} not found") from e

        company = await self._company_repository.get_by_id(
            parsed, include_deleted=True
        )
        if company is None:
            raise CompanyNotFoundError(f"Company {company_id} not found")
        return company
