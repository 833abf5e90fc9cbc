"""Registration notifications.

Mail rendering and delivery are handled outside this service; these
listeners record the hand-off.
"""

from __future__ import annotations

from iam.application.observability import DefaultListenerProbe, ListenerProbe
from iam.domain.events import UserRegistered


class SendWelcomeEmail:
    """Welcome a newly registered user."""

    name = "SendWelcomeEmail"

    def __init__(self, probe: ListenerProbe | None = None) -> None:
        self._probe = probe or DefaultListenerProbe()

    async def handle(self, event: UserRegistered) -> None:
        self._probe.welcome_email_sent(
            user_id=event.user.user_id,
            email=event.user.email,
        )


class NotifyAdminOfNewUser:
    """Tell the administrator about a new registration."""

    name = "NotifyAdminOfNewUser"

    def __init__(self, admin_email: str, probe: ListenerProbe | None = None) -> None:
        self._admin_email = admin_email
        self._probe = probe or DefaultListenerProbe()

    async def handle(self, event: UserRegistered) -> None:
        self._probe.admin_notified_of_new_user(
            user_id=event.user.user_id,
            email=event.user.email,
            admin_email=self._admin_email,
        )
