"""Probes for process-level events: engine lifecycle, startup and shutdown.

Request-scoped probes live with the IAM layers that emit them; these
cover what happens outside any request.
"""

from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)
from infrastructure.observability.startup_probe import (
    DefaultStartupProbe,
    StartupProbe,
)
from shared_kernel.observability_context import ObservationContext

__all__ = [
    "ConnectionProbe",
    "DefaultConnectionProbe",
    "DefaultStartupProbe",
    "ObservationContext",
    "StartupProbe",
]
