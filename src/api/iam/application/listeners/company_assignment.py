"""Grants every new user access to the shared "Main" company."""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam.application.observability import DefaultListenerProbe, ListenerProbe
from iam.application.slugs import unique_slug
from iam.domain.aggregates import Access, Company
from iam.domain.events import UserCreated
from iam.domain.value_objects import MAIN_COMPANY_NAME, UserId
from iam.ports.repositories import IAccessRepository, ICompanyRepository


class AssignCompanyToUser:
    """Ensure the Main company exists and grant the new user access to it.

    The first user ever created causes the Main company to be created.
    Runs after the user's transaction has committed, so it opens its own
    session and transaction.
    """

    name = "AssignCompanyToUser"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        company_repository_factory: Callable[[AsyncSession], ICompanyRepository],
        access_repository_factory: Callable[[AsyncSession], IAccessRepository],
        probe: ListenerProbe | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._company_repository_factory = company_repository_factory
        self._access_repository_factory = access_repository_factory
        self._probe = probe or DefaultListenerProbe()

    async def handle(self, event: UserCreated) -> None:
        user_id = UserId(value=event.user.user_id)

        async with self._session_factory() as session:
            async with session.begin():
                companies = self._company_repository_factory(session)
                accesses = self._access_repository_factory(session)

                company = await companies.get_by_name(MAIN_COMPANY_NAME)
                if company is None:
                    slug = await unique_slug(
                        MAIN_COMPANY_NAME, companies.slug_exists, fallback="company"
                    )
                    company = Company.create(name=MAIN_COMPANY_NAME, slug=slug)
                    await companies.save(company)
                    self._probe.main_company_created(
                        company_id=company.id.value, user_id=user_id.value
                    )

                if not await accesses.exists(user_id, company.id):
                    await accesses.save(Access.grant(user_id, company.id))

        self._probe.company_access_assigned(
            user_id=user_id.value,
            company_id=company.id.value,
            company_name=company.name,
        )
