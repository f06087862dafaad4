"""
Tickets Application DTOs
========================

Pydantic models for the ticket and comment API.
"""

from datetime import datetime
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from servicedesk.shared.api.pagination import Pagination


# ========== Type Aliases for Literals ==========
TicketStatusStr = Literal["todo", "in_progress", "resolved", "closed"]
TicketPriorityStr = Literal["low", "medium", "high", "urgent"]

# Surrounding whitespace is stripped before the length bounds apply.
TicketTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=5, max_length=255)]
TicketDescription = Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]


# ========== Request DTOs ==========

class TicketCreateRequest(BaseModel):
    """Request model for filing a ticket."""
    title: TicketTitle = Field(..., description="Short summary")
    description: TicketDescription = Field(..., description="What is wrong")
    priority: TicketPriorityStr = Field(default="medium", description="Ticket priority")
    category: Optional[str] = Field(None, max_length=100, description="Free-text category")


class TicketUpdateRequest(BaseModel):
    """Partial update; at least one field must be present."""
    title: Optional[TicketTitle] = None
    description: Optional[TicketDescription] = None
    status: Optional[TicketStatusStr] = None
    priority: Optional[TicketPriorityStr] = None
    category: Optional[str] = Field(None, max_length=100)
    assignee_id: Optional[int] = Field(None, description="Staff user to assign; null unassigns")


class CommentCreateRequest(BaseModel):
    content: str = Field(..., min_length=1, description="Comment body")
    is_internal: bool = Field(default=False, description="Staff-only note flag")


# ========== Response DTOs ==========

class TicketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    status: str
    priority: str
    category: Optional[str] = None
    reporter_id: int
    reporter_name: Optional[str] = None
    reporter_email: Optional[str] = None
    assignee_id: Optional[int] = None
    assignee_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ticket_id: int
    user_id: int
    author_name: Optional[str] = None
    content: str
    is_internal: bool
    created_at: Optional[datetime] = None


class TicketListResponse(BaseModel):
    tickets: List[TicketResponse]
    pagination: Pagination


class TicketDetailResponse(BaseModel):
    ticket: TicketResponse
    comments: List[CommentResponse]


class TicketMutationResponse(BaseModel):
    message: str
    ticket: TicketResponse


class CommentCreatedResponse(BaseModel):
    message: str
    comment: CommentResponse


class TicketStatsResponse(BaseModel):
    """Ticket counts grouped three ways."""
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
    by_category: Dict[str, int]
