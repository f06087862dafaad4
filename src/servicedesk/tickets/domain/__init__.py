"""
Tickets Domain Layer
====================

Contains:
- Entities: Ticket, Comment
- Triggers: ticket mutation -> notification intent rules
"""

from servicedesk.tickets.domain.entities import Ticket, Comment
from servicedesk.tickets.domain.triggers import (
    ticket_created_intent,
    status_changed_intent,
    comment_added_intent,
)

__all__ = [
    "Ticket",
    "Comment",
    "ticket_created_intent",
    "status_changed_intent",
    "comment_added_intent",
]
