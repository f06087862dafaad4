"""
Notifications Domain Layer
==========================

Contains:
- Value Objects: recipient targets, intents, rendered email
- Entities: Notification, DispatchResult
"""

from servicedesk.notifications.domain.entities import Notification, DispatchResult
from servicedesk.notifications.domain.value_objects import (
    ToUser,
    ToRole,
    RecipientTarget,
    NotificationIntent,
    EmailContent,
)

__all__ = [
    "Notification",
    "DispatchResult",
    "ToUser",
    "ToRole",
    "RecipientTarget",
    "NotificationIntent",
    "EmailContent",
]
