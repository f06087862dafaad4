"""
Notifications Application DTOs
==============================

Pydantic models for the notification inbox API.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from servicedesk.shared.api.pagination import Pagination


# ========== Response DTOs ==========

class NotificationResponse(BaseModel):
    """One notification as shown in the inbox."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    ticket_id: Optional[int] = None
    ticket_title: Optional[str] = None
    type: str
    title: str
    message: str
    is_read: bool
    created_at: Optional[datetime] = None


class NotificationListResponse(BaseModel):
    notifications: List[NotificationResponse]
    pagination: Pagination


class UnreadCountResponse(BaseModel):
    count: int


class NotificationReadResponse(BaseModel):
    message: str
    notification: NotificationResponse


class MarkAllReadResponse(BaseModel):
    message: str
    count: int


class MessageResponse(BaseModel):
    message: str
