"""Access gate for protected API routes.

The gate decides whether an already-resolved principal may use the API.
Checks run in a fixed order and stop at the first failure:

1. a principal must be present (401)
2. the principal's email must be verified (403)
3. the principal must not be soft deleted (403)

The gate never loads the principal itself and has no side effects
beyond its observability probe.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from iam.application.observability import AccessGateProbe, DefaultAccessGateProbe
from iam.application.value_objects import Principal


class DenialReason(StrEnum):
    """Why the gate refused a request."""

    UNAUTHENTICATED = "unauthenticated"
    EMAIL_NOT_VERIFIED = "email_not_verified"
    ACCOUNT_DEACTIVATED = "account_deactivated"


@dataclass(frozen=True)
class AccessDenial:
    """A terminal refusal, carrying the HTTP status and response body."""

    reason: DenialReason
    status_code: int
    message: str
    error: str | None = None

    def body(self) -> dict[str, Any]:
        """Render the JSON response body for this denial."""
        body: dict[str, Any] = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


UNAUTHENTICATED = AccessDenial(
    reason=DenialReason.UNAUTHENTICATED,
    status_code=401,
    message="Unauthenticated.",
)
EMAIL_NOT_VERIFIED = AccessDenial(
    reason=DenialReason.EMAIL_NOT_VERIFIED,
    status_code=403,
    message="Your email address is not verified.",
    error="email_not_verified",
)
ACCOUNT_DEACTIVATED = AccessDenial(
    reason=DenialReason.ACCOUNT_DEACTIVATED,
    status_code=403,
    message="Your account has been deactivated.",
    error="account_deactivated",
)


class AccessDeniedError(Exception):
    """Raised when the access gate refuses a request.

    Rendered by an application-level exception handler using the
    denial's status code and body.
    """

    def __init__(self, denial: AccessDenial) -> None:
        super().__init__(denial.message)
        self.denial = denial

    @classmethod
    def from_denial(cls, denial: AccessDenial) -> AccessDeniedError:
        """Build the error subclass matching a denial."""
        error_types: dict[DenialReason, type[AccessDeniedError]] = {
            DenialReason.UNAUTHENTICATED: UnauthenticatedError,
            DenialReason.EMAIL_NOT_VERIFIED: EmailNotVerifiedError,
            DenialReason.ACCOUNT_DEACTIVATED: AccountDeactivatedError,
        }
        return error_types[denial.reason](denial)


class UnauthenticatedError(AccessDeniedError):
    """No valid credential was presented."""


class EmailNotVerifiedError(AccessDeniedError):
    """The principal has not verified their email address."""


class AccountDeactivatedError(AccessDeniedError):
    """The principal has been soft deleted."""


def evaluate_access(
    principal: Principal | None,
    probe: AccessGateProbe | None = None,
) -> AccessDenial | None:
    """Decide whether a principal is admitted.

    Args:
        principal: The resolved principal, or None when no valid
            credential accompanied the request
        probe: Optional domain probe for observability

    Returns:
        None when admitted, otherwise the first failing denial
    """
    probe = probe or DefaultAccessGateProbe()

    if principal is None:
        probe.access_denied(reason=DenialReason.UNAUTHENTICATED.value, user_id=None)
        return UNAUTHENTICATED

    if principal.email_verified_at is None:
        probe.access_denied(
            reason=DenialReason.EMAIL_NOT_VERIFIED.value,
            user_id=principal.user_id.value,
        )
        return EMAIL_NOT_VERIFIED

    if principal.deleted_at is not None:
        probe.access_denied(
            reason=DenialReason.ACCOUNT_DEACTIVATED.value,
            user_id=principal.user_id.value,
        )
        return ACCOUNT_DEACTIVATED

    probe.access_granted(user_id=principal.user_id.value)
    return None
