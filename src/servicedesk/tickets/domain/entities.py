"""
Ticket Domain Entities
======================

Tickets and their comments.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from servicedesk.config import TicketStatus, TicketPriority, VALID_STATUSES, VALID_PRIORITIES


@dataclass
class Ticket:
    """
    A support request filed by a user.

    Any status may follow any other; there is no enforced workflow.
    resolved_at is informational and not set by status changes.
    """
    id: int
    title: str
    description: str
    reporter_id: int
    status: str = TicketStatus.TODO
    priority: str = TicketPriority.MEDIUM
    category: Optional[str] = None
    assignee_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None

    # Denormalized for display
    reporter_name: Optional[str] = None
    reporter_email: Optional[str] = None
    assignee_name: Optional[str] = None

    def __post_init__(self):
        if self.status not in VALID_STATUSES:
            raise ValueError(f"Unknown status: {self.status}")
        if self.priority not in VALID_PRIORITIES:
            raise ValueError(f"Unknown priority: {self.priority}")

    def is_accessible_by(self, user) -> bool:
        """Staff see every ticket; users only the ones they reported."""
        return user.is_staff or self.reporter_id == user.id


@dataclass
class Comment:
    """
    A comment on a ticket.

    is_internal is stored and returned but does not hide the comment
    from anyone.
    """
    id: int
    ticket_id: int
    user_id: int
    content: str
    is_internal: bool = False
    created_at: Optional[datetime] = None
    author_name: Optional[str] = None
