"""
Notification Domain Entities
============================
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Notification:
    """An in-app notification addressed to one user."""
    id: int
    user_id: int
    type: str
    title: str
    message: str
    ticket_id: Optional[int] = None
    is_read: bool = False
    created_at: Optional[datetime] = None
    ticket_title: Optional[str] = None


@dataclass
class DispatchResult:
    """
    Outcome of dispatching one intent.

    The failure variant carries the error text; the dispatch service
    returns it instead of raising.
    """
    delivered: bool
    recipient_ids: List[int] = field(default_factory=list)
    notifications_created: int = 0
    email_sent: bool = False
    error: Optional[str] = None

    @classmethod
    def ok(cls, recipient_ids: List[int], notifications_created: int,
           email_sent: bool) -> "DispatchResult":
        return cls(
            delivered=True,
            recipient_ids=list(recipient_ids),
            notifications_created=notifications_created,
            email_sent=email_sent,
        )

    @classmethod
    def failed(cls, error: str) -> "DispatchResult":
        return cls(delivered=False, error=error)
