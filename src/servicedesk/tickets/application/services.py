"""
Tickets Application Services
============================

Ticket and comment use cases.

Each mutation commits its own write first and only then hands the
resulting intent to the notification dispatch service, so a failed
dispatch can never undo the ticket change.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from servicedesk.core import (
    PermissionDeniedException,
    ResourceNotFoundException,
    ValidationException,
)
from servicedesk.notifications.application import NotificationDispatchService
from servicedesk.shared.api.pagination import PageRequest
from servicedesk.shared.infrastructure.logging import get_logger
from servicedesk.tickets.application.dto import (
    CommentCreateRequest,
    TicketCreateRequest,
    TicketUpdateRequest,
)
from servicedesk.tickets.domain import (
    Comment,
    Ticket,
    comment_added_intent,
    status_changed_intent,
    ticket_created_intent,
)
from servicedesk.users.application import IUserRepository
from servicedesk.users.domain import User

logger = get_logger(__name__)


# ========== Repository Interfaces ==========

class ITicketRepository(ABC):
    """Interface for ticket and comment data access."""

    @abstractmethod
    async def create(self, reporter_id: int, title: str, description: str,
                     priority: str, category: Optional[str]) -> Ticket:
        """Insert a ticket in status todo."""

    @abstractmethod
    async def get_by_id(self, ticket_id: int) -> Optional[Ticket]:
        """Get ticket by id."""

    @abstractmethod
    async def update(self, ticket_id: int, fields: dict) -> Optional[Ticket]:
        """Apply field changes; None when the ticket does not exist."""

    @abstractmethod
    async def search(self, filters: dict, page: PageRequest) -> Tuple[List[Ticket], int]:
        """Filtered newest-first page of tickets and the total."""

    @abstractmethod
    async def add_comment(self, ticket_id: int, user_id: int, content: str,
                          is_internal: bool) -> Comment:
        """Insert a comment."""

    @abstractmethod
    async def list_comments(self, ticket_id: int) -> List[Comment]:
        """Comments of a ticket, oldest first."""

    @abstractmethod
    async def count_by(self, column: str) -> Dict[str, int]:
        """Ticket counts grouped by status, priority or category."""

    @abstractmethod
    async def commit(self) -> None:
        """Make pending writes durable."""


# ========== Application Services ==========

class TicketService:
    """Use cases over tickets and comments."""

    def __init__(
        self,
        tickets: ITicketRepository,
        users: IUserRepository,
        dispatcher: NotificationDispatchService
    ):
        self._tickets = tickets
        self._users = users
        self._dispatcher = dispatcher

    async def _get_accessible(self, user: User, ticket_id: int) -> Ticket:
        ticket = await self._tickets.get_by_id(ticket_id)
        if ticket is None:
            raise ResourceNotFoundException("Ticket", str(ticket_id))
        if not ticket.is_accessible_by(user):
            raise PermissionDeniedException()
        return ticket

    async def create_ticket(self, user: User, request: TicketCreateRequest) -> Ticket:
        ticket = await self._tickets.create(
            reporter_id=user.id,
            title=request.title,
            description=request.description,
            priority=request.priority,
            category=request.category,
        )
        await self._tickets.commit()
        logger.info("Ticket created", extra={"ticket_id": ticket.id, "reporter_id": user.id})

        await self._dispatcher.dispatch(ticket_created_intent(ticket))
        return ticket

    async def update_ticket(self, user: User, ticket_id: int,
                            request: TicketUpdateRequest) -> Ticket:
        # Only category and assignee may be cleared with an explicit null.
        fields = {
            key: value
            for key, value in request.model_dump(exclude_unset=True).items()
            if value is not None or key in ("category", "assignee_id")
        }
        if not fields:
            raise ValidationException("No fields to update")

        existing = await self._get_accessible(user, ticket_id)

        if fields.get("assignee_id") is not None:
            assignee = await self._users.get_by_id(fields["assignee_id"])
            if assignee is None or not assignee.is_staff:
                raise ValidationException("Assignee must be an agent or admin")

        fields["updated_at"] = datetime.now(timezone.utc)
        ticket = await self._tickets.update(ticket_id, fields)
        if ticket is None:
            raise ResourceNotFoundException("Ticket", str(ticket_id))
        await self._tickets.commit()
        logger.info(
            "Ticket updated",
            extra={"ticket_id": ticket_id, "fields": sorted(fields), "updated_by": user.id}
        )

        intent = status_changed_intent(existing.status, ticket)
        if intent is not None:
            await self._dispatcher.dispatch(intent)
        return ticket

    async def add_comment(self, user: User, ticket_id: int,
                          request: CommentCreateRequest) -> Comment:
        ticket = await self._get_accessible(user, ticket_id)

        comment = await self._tickets.add_comment(
            ticket_id=ticket_id,
            user_id=user.id,
            content=request.content,
            is_internal=request.is_internal,
        )
        await self._tickets.commit()
        logger.info("Comment added", extra={"ticket_id": ticket_id, "comment_id": comment.id})

        await self._dispatcher.dispatch(comment_added_intent(ticket))
        return comment

    async def get_ticket(self, user: User, ticket_id: int) -> Tuple[Ticket, List[Comment]]:
        ticket = await self._get_accessible(user, ticket_id)
        return ticket, await self._tickets.list_comments(ticket_id)

    async def list_tickets(self, user: User, filters: dict,
                           page: PageRequest) -> Tuple[List[Ticket], int]:
        """Users only see tickets they reported, whatever the filters say."""
        if not user.is_staff:
            filters = {**filters, "reporter": user.id}
        return await self._tickets.search(filters, page)

    async def get_stats(self, user: User) -> Dict[str, Dict[str, int]]:
        if not user.is_staff:
            raise PermissionDeniedException()
        return {
            "by_status": await self._tickets.count_by("status"),
            "by_priority": await self._tickets.count_by("priority"),
            "by_category": await self._tickets.count_by("category"),
        }
