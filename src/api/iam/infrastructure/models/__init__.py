"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations.
"""

from iam.infrastructure.models.access import AccessModel
from iam.infrastructure.models.access_token import AccessTokenModel
from iam.infrastructure.models.company import CompanyModel
from iam.infrastructure.models.user import UserModel

__all__ = [
    "AccessModel",
    "AccessTokenModel",
    "CompanyModel",
    "UserModel",
]
