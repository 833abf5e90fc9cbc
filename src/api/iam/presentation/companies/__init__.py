"""Companies HTTP API."""

from iam.presentation.companies.routes import router

__all__ = ["router"]
