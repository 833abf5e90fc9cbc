"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
service and repository operations. They are raised by the application
layer and mapped to HTTP responses by the presentation layer.
"""

from iam.domain.exceptions import NotDeletedError

__all__ = [
    "CompanyNotFoundError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "NotDeletedError",
    "TokenRevocationError",
    "UnauthorizedError",
    "UserNotFoundError",
]


class UserNotFoundError(Exception):
    """Raised when a user cannot be found by username or ID."""

    pass


class CompanyNotFoundError(Exception):
    """Raised when a company cannot be found by slug or ID."""

    pass


class DuplicateEmailError(Exception):
    """Raised when attempting to register or update a user with an email
    address that already belongs to another user.
    """

    pass


class UnauthorizedError(Exception):
    """Raised when an admitted principal is not allowed to perform an action.

    This is an authorization policy failure, distinct from the access gate
    which decides whether the principal may use the API at all.
    """

    pass


class InvalidCredentialsError(Exception):
    """Raised when an email and password pair does not match any active user."""

    pass


class TokenRevocationError(Exception):
    """Raised when the access tokens of a user could not be revoked.

    Revocation is part of user deletion, so this error aborts the deletion.
    """

    pass
