"""Auth HTTP API."""

from iam.presentation.auth.routes import router

__all__ = ["router"]
