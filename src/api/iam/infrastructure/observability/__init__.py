"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from iam.infrastructure.observability.access_token_repository_probe import (
    AccessTokenRepositoryProbe,
    DefaultAccessTokenRepositoryProbe,
)
from iam.infrastructure.observability.repository_probe import (
    CompanyRepositoryProbe,
    DefaultCompanyRepositoryProbe,
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)

__all__ = [
    "AccessTokenRepositoryProbe",
    "DefaultAccessTokenRepositoryProbe",
    "CompanyRepositoryProbe",
    "DefaultCompanyRepositoryProbe",
    "UserRepositoryProbe",
    "DefaultUserRepositoryProbe",
]
