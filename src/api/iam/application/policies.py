"""Authorization policies for user and company management.

Policies run after the access gate has admitted the principal. Listing,
viewing and creating are open to every admitted principal; the checks
below cover the remaining actions and raise UnauthorizedError on refusal.
"""

from __future__ import annotations

from iam.application.value_objects import Principal
from iam.domain.aggregates import Company, User
from iam.ports.exceptions import UnauthorizedError
from iam.ports.repositories import IAccessRepository


class UserPolicy:
    """Users may edit only themselves and may remove anyone but themselves."""

    def authorize_update(self, actor: Principal, user: User) -> None:
        if actor.user_id != user.id:
            raise UnauthorizedError("Users may only update their own profile")

    def authorize_delete(self, actor: Principal, user: User) -> None:
        self._deny_self(actor, user, "delete")

    def authorize_restore(self, actor: Principal, user: User) -> None:
        self._deny_self(actor, user, "restore")

    def authorize_force_delete(self, actor: Principal, user: User) -> None:
        self._deny_self(actor, user, "force delete")

    @staticmethod
    def _deny_self(actor: Principal, user: User, action: str) -> None:
        if actor.user_id == user.id:
            raise UnauthorizedError(f"Users may not {action} themselves")


class CompanyPolicy:
    """Company changes require an access grant to that company.

    The shared Main company can never be deleted, softly or permanently.
    """

    def __init__(self, access_repository: IAccessRepository) -> None:
        self._access_repository = access_repository

    async def authorize_update(self, actor: Principal, company: Company) -> None:
        await self._require_access(actor, company)

    async def authorize_delete(self, actor: Principal, company: Company) -> None:
        self._protect_main(company)
        await self._require_access(actor, company)

    async def authorize_restore(self, actor: Principal, company: Company) -> None:
        await self._require_access(actor, company)

    async def authorize_force_delete(self, actor: Principal, company: Company) -> None:
        self._protect_main(company)
        await self._require_access(actor, company)

    async def _require_access(self, actor: Principal, company: Company) -> None:
        if not await self._access_repository.exists(actor.user_id, company.id):
            raise UnauthorizedError(
                f"User {actor.user_id.value} has no access to company {company.id.value}"
            )

    @staticmethod
    def _protect_main(company: Company) -> None:
        if company.is_main:
            raise UnauthorizedError("The Main company cannot be deleted")
