"""HTTP presentation layer for the IAM bounded context."""

from fastapi import APIRouter

from iam.presentation import auth, companies, users
from iam.presentation.errors import register_exception_handlers

router = APIRouter(prefix="/v1")

router.include_router(auth.router)
router.include_router(users.router)
router.include_router(companies.router)

__all__ = ["router", "register_exception_handlers"]
