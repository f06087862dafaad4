"""
Notification Dependencies
=========================

FastAPI providers for the dispatch pipeline. The email dispatcher is built
once at startup and kept on ``app.state``.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from servicedesk.infrastructure.database import get_session
from servicedesk.notifications.application import (
    EmailDispatcher,
    NotificationDispatchService,
    RecipientResolver,
)
from servicedesk.notifications.infrastructure import (
    SQLAlchemyNotificationRepository,
    UserDirectoryAdapter,
)
from servicedesk.users.infrastructure import SQLAlchemyUserRepository


def get_email_dispatcher(request: Request) -> EmailDispatcher:
    """App-wide dispatcher; a no-op one when startup did not configure mail."""
    dispatcher = getattr(request.app.state, "email_dispatcher", None)
    return dispatcher if dispatcher is not None else EmailDispatcher(None)


async def get_dispatch_service(
    session: AsyncSession = Depends(get_session),
    email_dispatcher: EmailDispatcher = Depends(get_email_dispatcher)
) -> NotificationDispatchService:
    """Dispatch service bound to the request's session."""
    return NotificationDispatchService(
        repository=SQLAlchemyNotificationRepository(session),
        resolver=RecipientResolver(UserDirectoryAdapter(SQLAlchemyUserRepository(session))),
        email_dispatcher=email_dispatcher,
    )
