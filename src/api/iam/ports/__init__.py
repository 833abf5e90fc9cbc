"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories and domain services without
specifying implementation details. This allows for dependency inversion
and makes the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    CompanyNotFoundError,
    DuplicateEmailError,
    InvalidCredentialsError,
    NotDeletedError,
    TokenRevocationError,
    UnauthorizedError,
    UserNotFoundError,
)
from iam.ports.repositories import (
    IAccessRepository,
    IAccessTokenRepository,
    ICompanyRepository,
    IUserRepository,
    Page,
)

__all__ = [
    "IAccessRepository",
    "IAccessTokenRepository",
    "ICompanyRepository",
    "IUserRepository",
    "Page",
    "CompanyNotFoundError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "NotDeletedError",
    "TokenRevocationError",
    "UnauthorizedError",
    "UserNotFoundError",
]
