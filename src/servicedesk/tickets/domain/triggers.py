"""
Ticket Event Triggers
=====================

Pure functions mapping ticket mutations to notification intents.

- create: everyone on staff hears about the new ticket
- status change: the reporter hears about it, only when the status moved
- comment: the reporter hears about it, always (including their own comments
  and internal ones)
"""

from typing import Optional

from servicedesk.config import NotificationType, Role
from servicedesk.notifications.domain import NotificationIntent, ToRole, ToUser
from servicedesk.tickets.domain.entities import Ticket


def ticket_created_intent(ticket: Ticket) -> NotificationIntent:
    return NotificationIntent(
        target=ToRole(Role.AGENT),
        type=NotificationType.TICKET_CREATED,
        title="New Ticket Created",
        message=f"New ticket #{ticket.id}: {ticket.title}",
        ticket_id=ticket.id,
    )


def status_changed_intent(previous_status: str, ticket: Ticket) -> Optional[NotificationIntent]:
    """None when the status did not change."""
    if ticket.status == previous_status:
        return None
    return NotificationIntent(
        target=ToUser(ticket.reporter_id),
        type=NotificationType.STATUS_CHANGED,
        title="Ticket Status Updated",
        message=f"Ticket #{ticket.id} status changed to {ticket.status}",
        ticket_id=ticket.id,
    )


def comment_added_intent(ticket: Ticket) -> NotificationIntent:
    return NotificationIntent(
        target=ToUser(ticket.reporter_id),
        type=NotificationType.COMMENT_ADDED,
        title="New Comment Added",
        message=f"New comment added to ticket #{ticket.id}",
        ticket_id=ticket.id,
    )
