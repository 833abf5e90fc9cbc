"""Listeners that record authentication activity and user audit trails."""

from __future__ import annotations

from iam.application.observability import DefaultListenerProbe, ListenerProbe
from iam.domain.events import (
    LifecycleEvent,
    UserLoggedIn,
    UserLoggedOut,
    UserTokenRefreshed,
    UserUpdated,
)


class LogUserLogin:
    name = "LogUserLogin"

    def __init__(self, probe: ListenerProbe | None = None) -> None:
        self._probe = probe or DefaultListenerProbe()

    async def handle(self, event: UserLoggedIn) -> None:
        self._probe.user_logged_in(
            user_id=event.user.user_id,
            email=event.user.email,
            ip_address=event.ip_address,
            user_agent=event.user_agent,
        )


class LogUserLogout:
    name = "LogUserLogout"

    def __init__(self, probe: ListenerProbe | None = None) -> None:
        self._probe = probe or DefaultListenerProbe()

    async def handle(self, event: UserLoggedOut) -> None:
        self._probe.user_logged_out(
            user_id=event.user.user_id,
            email=event.user.email,
            ip_address=event.ip_address,
            all_devices=event.all_devices,
        )


class LogTokenRefresh:
    name = "LogTokenRefresh"

    def __init__(self, probe: ListenerProbe | None = None) -> None:
        self._probe = probe or DefaultListenerProbe()

    async def handle(self, event: UserTokenRefreshed) -> None:
        self._probe.token_refreshed(
            user_id=event.user.user_id,
            email=event.user.email,
        )


class RecordUserAudit:
    """Write an audit trail entry for updates, deletions and restores."""

    name = "RecordUserAudit"

    def __init__(self, probe: ListenerProbe | None = None) -> None:
        self._probe = probe or DefaultListenerProbe()

    async def handle(self, event: LifecycleEvent) -> None:
        changed_fields = event.changed_fields if isinstance(event, UserUpdated) else ()
        self._probe.user_audit_recorded(
            event_type=type(event).__name__,
            user_id=event.user.user_id,
            changed_fields=changed_fields,
        )
