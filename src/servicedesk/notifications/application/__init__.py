"""
Notifications Application Layer
===============================

Contains:
- Services: recipient resolution, email dispatch, the dispatch pipeline
  and the inbox use cases
- DTOs: Data transfer objects for API serialization
"""

from servicedesk.notifications.application.dto import (
    NotificationResponse,
    NotificationListResponse,
    UnreadCountResponse,
    NotificationReadResponse,
    MarkAllReadResponse,
    MessageResponse,
)
from servicedesk.notifications.application.services import (
    INotificationRepository,
    IUserDirectory,
    IEmailTransport,
    RecipientResolver,
    EmailDispatcher,
    NotificationDispatchService,
    NotificationService,
)

__all__ = [
    # DTOs
    "NotificationResponse",
    "NotificationListResponse",
    "UnreadCountResponse",
    "NotificationReadResponse",
    "MarkAllReadResponse",
    "MessageResponse",
    # Services
    "RecipientResolver",
    "EmailDispatcher",
    "NotificationDispatchService",
    "NotificationService",
    # Interfaces
    "INotificationRepository",
    "IUserDirectory",
    "IEmailTransport",
]
