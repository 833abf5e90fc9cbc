"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.auth_service_probe import (
    AuthServiceProbe,
    DefaultAuthServiceProbe,
)
from iam.application.observability.authentication_probe import (
    AccessGateProbe,
    AuthenticationProbe,
    DefaultAccessGateProbe,
    DefaultAuthenticationProbe,
)
from iam.application.observability.company_service_probe import (
    CompanyServiceProbe,
    DefaultCompanyServiceProbe,
)
from iam.application.observability.listener_probe import (
    DefaultListenerProbe,
    ListenerProbe,
)
from iam.application.observability.user_lifecycle_probe import (
    DefaultUserLifecycleProbe,
    UserLifecycleProbe,
)
from iam.application.observability.user_service_probe import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)

__all__ = [
    "AccessGateProbe",
    "DefaultAccessGateProbe",
    "AuthenticationProbe",
    "DefaultAuthenticationProbe",
    "AuthServiceProbe",
    "DefaultAuthServiceProbe",
    "CompanyServiceProbe",
    "DefaultCompanyServiceProbe",
    "ListenerProbe",
    "DefaultListenerProbe",
    "UserLifecycleProbe",
    "DefaultUserLifecycleProbe",
    "UserServiceProbe",
    "DefaultUserServiceProbe",
]
