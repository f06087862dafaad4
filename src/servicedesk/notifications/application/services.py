"""
Notifications Application Services
==================================

Recipient resolution, best-effort email, the dispatch pipeline that ticket
events run through, and the use cases behind the notification inbox.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from servicedesk.config import Role, ROLE_RECIPIENTS, settings
from servicedesk.core import ResourceNotFoundException, TransportException
from servicedesk.notifications.domain import (
    DispatchResult,
    EmailContent,
    Notification,
    NotificationIntent,
    RecipientTarget,
    ToUser,
)
from servicedesk.shared.api.pagination import PageRequest
from servicedesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Repository Interfaces ==========

class INotificationRepository(ABC):
    """Interface for notification persistence."""

    @abstractmethod
    async def create(self, user_id: int, ticket_id: Optional[int], type: str,
                     title: str, message: str) -> Notification:
        """Insert one unread notification."""

    @abstractmethod
    async def mark_read(self, notification_id: int, user_id: int) -> Optional[Notification]:
        """Flag a notification owned by user_id as read; None when not found."""

    @abstractmethod
    async def mark_all_read(self, user_id: int) -> int:
        """Flag every unread notification of the user; returns rows changed."""

    @abstractmethod
    async def unread_count(self, user_id: int) -> int:
        """Number of unread notifications of the user."""

    @abstractmethod
    async def delete(self, notification_id: int, user_id: int) -> bool:
        """Delete a notification owned by user_id; False when not found."""

    @abstractmethod
    async def list_for_user(self, user_id: int, page: PageRequest,
                            unread_only: bool = False) -> Tuple[List[Notification], int]:
        """Newest-first page of the user's notifications and the total."""

    @abstractmethod
    async def commit(self) -> None:
        """Make pending writes durable."""

    @abstractmethod
    async def rollback(self) -> None:
        """Discard pending writes."""


class IUserDirectory(ABC):
    """Read-only view of users needed to address notifications."""

    @abstractmethod
    async def ids_by_roles(self, roles: List[str]) -> List[int]:
        """Ids of every user holding one of the roles."""

    @abstractmethod
    async def email_of(self, user_id: int) -> Optional[str]:
        """Email address of a user; None when unknown."""

    @abstractmethod
    async def first_email_by_role(self, role: str) -> Optional[str]:
        """Email of the lowest-id user holding the role."""


class IEmailTransport(ABC):
    """Outbound mail. Raises TransportException on failure."""

    @abstractmethod
    async def send(self, to_address: str, subject: str, html_body: str,
                   text_body: str) -> None:
        """Deliver one message."""


# ========== Application Services ==========

class RecipientResolver:
    """Turns a recipient target into user ids and an email address."""

    def __init__(self, directory: IUserDirectory):
        self._directory = directory

    async def resolve(self, target: RecipientTarget) -> List[int]:
        """
        Recipient ids for a target.

        ToUser is returned as is, without an existence check. ToRole expands
        through ROLE_RECIPIENTS against current role membership; an empty
        list is a valid answer.
        """
        if isinstance(target, ToUser):
            return [target.user_id]
        roles = ROLE_RECIPIENTS.get(target.role, [target.role])
        return await self._directory.ids_by_roles(roles)

    async def email_address(self, target: RecipientTarget) -> Optional[str]:
        """A single address per intent: the user, or the first admin for roles."""
        if isinstance(target, ToUser):
            return await self._directory.email_of(target.user_id)
        return await self._directory.first_email_by_role(Role.ADMIN)


class EmailDispatcher:
    """
    Best-effort email.

    Without a transport (mail not configured) every send is a silent no-op.
    Transport failures are logged and reported as False, never raised.
    """

    def __init__(self, transport: Optional[IEmailTransport] = None):
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self._transport is not None

    async def send(self, to_address: str, subject: str, html_body: str,
                   text_body: str) -> bool:
        if self._transport is None:
            return False

        try:
            await self._transport.send(to_address, subject, html_body, text_body)
            return True
        except TransportException as e:
            logger.error(
                "Email send failed",
                extra={"to": to_address, "subject": subject, "error": e.message}
            )
            return False


class NotificationDispatchService:
    """
    Fans a notification intent out to in-app rows and one email.

    dispatch() never raises: any failure rolls back the pending rows, is
    logged, and comes back as a failed DispatchResult.
    """

    def __init__(
        self,
        repository: INotificationRepository,
        resolver: RecipientResolver,
        email_dispatcher: EmailDispatcher,
        client_url: Optional[str] = None
    ):
        self._repository = repository
        self._resolver = resolver
        self._email = email_dispatcher
        self._client_url = client_url or settings.client_url

    async def dispatch(self, intent: NotificationIntent) -> DispatchResult:
        try:
            recipient_ids = await self._resolver.resolve(intent.target)

            for user_id in recipient_ids:
                await self._repository.create(
                    user_id=user_id,
                    ticket_id=intent.ticket_id,
                    type=intent.type,
                    title=intent.title,
                    message=intent.message,
                )
            await self._repository.commit()

            email_sent = False
            if recipient_ids:
                email_sent = await self._send_email(intent)

            logger.info(
                "Notification dispatched",
                extra={
                    "type": intent.type,
                    "ticket_id": intent.ticket_id,
                    "recipients": len(recipient_ids),
                    "email_sent": email_sent,
                }
            )
            return DispatchResult.ok(recipient_ids, len(recipient_ids), email_sent)

        except Exception as e:
            await self._safe_rollback()
            logger.error(
                "Notification dispatch failed",
                extra={"type": intent.type, "ticket_id": intent.ticket_id, "error": str(e)},
                exc_info=True
            )
            return DispatchResult.failed(str(e))

    async def _send_email(self, intent: NotificationIntent) -> bool:
        if not self._email.enabled:
            return False

        to_address = await self._resolver.email_address(intent.target)
        if not to_address:
            logger.warning(
                "No email address for notification target",
                extra={"type": intent.type, "ticket_id": intent.ticket_id}
            )
            return False

        content = EmailContent.render(intent, self._client_url)
        return await self._email.send(
            to_address, content.subject, content.html_body, content.text_body
        )

    async def _safe_rollback(self) -> None:
        try:
            await self._repository.rollback()
        except Exception as e:
            logger.error("Rollback after dispatch failure failed", extra={"error": str(e)})


class NotificationService:
    """Use cases behind a user's notification inbox. Owner-only access."""

    def __init__(self, repository: INotificationRepository):
        self._repository = repository

    async def list_notifications(self, user_id: int, page: PageRequest,
                                 unread_only: bool = False) -> Tuple[List[Notification], int]:
        return await self._repository.list_for_user(user_id, page, unread_only)

    async def unread_count(self, user_id: int) -> int:
        return await self._repository.unread_count(user_id)

    async def mark_read(self, notification_id: int, user_id: int) -> Notification:
        """Idempotent; someone else's notification is reported as not found."""
        notification = await self._repository.mark_read(notification_id, user_id)
        if notification is None:
            raise ResourceNotFoundException("Notification", str(notification_id))
        return notification

    async def mark_all_read(self, user_id: int) -> int:
        count = await self._repository.mark_all_read(user_id)
        logger.info("Notifications marked read", extra={"user_id": user_id, "count": count})
        return count

    async def delete(self, notification_id: int, user_id: int) -> None:
        if not await self._repository.delete(notification_id, user_id):
            raise ResourceNotFoundException("Notification", str(notification_id))
