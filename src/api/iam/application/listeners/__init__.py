"""Event listeners for IAM bounded context.

Listeners react to committed domain events. Each runs in its own fault
boundary inside the dispatcher, so a failing listener never affects the
mutation that produced the event or the listeners after it.
"""

from iam.application.listeners.activity import (
    LogTokenRefresh,
    LogUserLogin,
    LogUserLogout,
    RecordUserAudit,
)
from iam.application.listeners.company_assignment import AssignCompanyToUser
from iam.application.listeners.notifications import (
    NotifyAdminOfNewUser,
    SendWelcomeEmail,
)
from iam.application.listeners.registration import (
    build_listener_registry,
    listener_table,
)

__all__ = [
    "AssignCompanyToUser",
    "LogTokenRefresh",
    "LogUserLogin",
    "LogUserLogout",
    "NotifyAdminOfNewUser",
    "RecordUserAudit",
    "SendWelcomeEmail",
    "build_listener_registry",
    "listener_table",
]
