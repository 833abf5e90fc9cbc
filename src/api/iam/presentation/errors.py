"""Application-level exception handlers for IAM errors.

Gate refusals, policy refusals and credential errors are raised from
dependencies and services and rendered here, so every route answers
them with the same JSON shape.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from iam.application.access_gate import AccessDeniedError
from iam.ports.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    UnauthorizedError,
)

UNAUTHORIZED_MESSAGE = "This action is unauthorized."
INVALID_CREDENTIALS_MESSAGE = "The provided credentials are incorrect."
DUPLICATE_EMAIL_MESSAGE = "The email has already been taken."


def _validation_error(field: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": message, "errors": {field: [message]}},
    )


async def access_denied_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, AccessDeniedError)
    headers = {"WWW-Authenticate": "Bearer"} if exc.denial.status_code == 401 else None
    return JSONResponse(
        status_code=exc.denial.status_code,
        content=exc.denial.body(),
        headers=headers,
    )


async def unauthorized_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"message": UNAUTHORIZED_MESSAGE},
    )


async def invalid_credentials_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    return _validation_error("email", INVALID_CREDENTIALS_MESSAGE)


async def duplicate_email_handler(request: Request, exc: Exception) -> JSONResponse:
    return _validation_error("email", DUPLICATE_EMAIL_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the IAM exception handlers on an application."""
    app.add_exception_handler(AccessDeniedError, access_denied_handler)
    app.add_exception_handler(UnauthorizedError, unauthorized_handler)
    app.add_exception_handler(InvalidCredentialsError, invalid_credentials_handler)
    app.add_exception_handler(DuplicateEmailError, duplicate_email_handler)
