"""
Notifications Infrastructure Layer
==================================

Contains:
- Models: SQLAlchemy ORM models
- Repositories: notification store
- External: user directory and mail transport adapters
"""

from servicedesk.notifications.infrastructure.models import NotificationModel
from servicedesk.notifications.infrastructure.repositories import SQLAlchemyNotificationRepository
from servicedesk.notifications.infrastructure.external import (
    UserDirectoryAdapter,
    SMTPEmailTransport,
)

__all__ = [
    "NotificationModel",
    "SQLAlchemyNotificationRepository",
    "UserDirectoryAdapter",
    "SMTPEmailTransport",
]
