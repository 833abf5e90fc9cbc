"""Access grant linking a user to a company."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from iam.domain.value_objects import AccessId, CompanyId, UserId


@dataclass(frozen=True)
class Access:
    """Grant allowing a user to manage a company."""

    id: AccessId
    user_id: UserId
    company_id: CompanyId
    created_at: datetime

    @classmethod
    def grant(cls, user_id: UserId, company_id: CompanyId) -> Access:
        return cls(
            id=AccessId.generate(),
            user_id=user_id,
            company_id=company_id,
            created_at=datetime.now(UTC),
        )
