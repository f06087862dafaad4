"""
Notifications Interfaces Layer
==============================

Contains:
- Controllers: FastAPI route handlers for the inbox
- Dependencies: providers for the dispatch pipeline
"""

from servicedesk.notifications.interfaces.controllers import notifications_router
from servicedesk.notifications.interfaces.dependencies import (
    get_email_dispatcher,
    get_dispatch_service,
)

__all__ = ["notifications_router", "get_email_dispatcher", "get_dispatch_service"]
