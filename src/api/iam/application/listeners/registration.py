"""Static registration of IAM event listeners."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

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
from iam.application.observability import DefaultListenerProbe, ListenerProbe
from iam.domain.events import (
    UserCreated,
    UserDeleted,
    UserLoggedIn,
    UserLoggedOut,
    UserRegistered,
    UserRestored,
    UserTokenRefreshed,
    UserUpdated,
)
from iam.ports.repositories import IAccessRepository, ICompanyRepository
from shared_kernel.events import EventDispatchProbe, EventListener, ListenerRegistry


def listener_table(
    session_factory: async_sessionmaker[AsyncSession],
    company_repository_factory: Callable[[AsyncSession], ICompanyRepository],
    access_repository_factory: Callable[[AsyncSession], IAccessRepository],
    admin_email: str,
    probe: ListenerProbe | None = None,
) -> Mapping[type, Iterable[EventListener]]:
    """Build the {event type: listeners} table for the IAM context.

    Listeners within one entry run in the order listed.
    """
    probe = probe or DefaultListenerProbe()
    audit = RecordUserAudit(probe=probe)

    return {
        UserCreated: (
            AssignCompanyToUser(
                session_factory=session_factory,
                company_repository_factory=company_repository_factory,
                access_repository_factory=access_repository_factory,
                probe=probe,
            ),
        ),
        UserRegistered: (
            SendWelcomeEmail(probe=probe),
            NotifyAdminOfNewUser(admin_email=admin_email, probe=probe),
        ),
        UserLoggedIn: (LogUserLogin(probe=probe),),
        UserLoggedOut: (LogUserLogout(probe=probe),),
        UserTokenRefreshed: (LogTokenRefresh(probe=probe),),
        UserUpdated: (audit,),
        UserDeleted: (audit,),
        UserRestored: (audit,),
    }


def build_listener_registry(
    session_factory: async_sessionmaker[AsyncSession],
    company_repository_factory: Callable[[AsyncSession], ICompanyRepository],
    access_repository_factory: Callable[[AsyncSession], IAccessRepository],
    admin_email: str,
    dispatch_probe: EventDispatchProbe | None = None,
) -> ListenerRegistry:
    """Build the listener registry for the IAM context."""
    return ListenerRegistry.from_table(
        listener_table(
            session_factory=session_factory,
            company_repository_factory=company_repository_factory,
            access_repository_factory=access_repository_factory,
            admin_email=admin_email,
        ),
        probe=dispatch_probe,
    )
