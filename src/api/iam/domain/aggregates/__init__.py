"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from iam.domain.aggregates.access import Access
from iam.domain.aggregates.access_token import AccessToken
from iam.domain.aggregates.company import Company
from iam.domain.aggregates.user import User

__all__ = [
    "Access",
    "AccessToken",
    "Company",
    "User",
]
