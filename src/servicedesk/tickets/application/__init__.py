"""
Tickets Application Layer
=========================

Contains:
- Services: ticket and comment use cases
- DTOs: Data transfer objects for API serialization
"""

from servicedesk.tickets.application.dto import (
    TicketCreateRequest,
    TicketUpdateRequest,
    CommentCreateRequest,
    TicketResponse,
    CommentResponse,
    TicketListResponse,
    TicketDetailResponse,
    TicketMutationResponse,
    CommentCreatedResponse,
    TicketStatsResponse,
)
from servicedesk.tickets.application.services import ITicketRepository, TicketService

__all__ = [
    # DTOs
    "TicketCreateRequest",
    "TicketUpdateRequest",
    "CommentCreateRequest",
    "TicketResponse",
    "CommentResponse",
    "TicketListResponse",
    "TicketDetailResponse",
    "TicketMutationResponse",
    "CommentCreatedResponse",
    "TicketStatsResponse",
    # Services
    "TicketService",
    # Repository Interfaces
    "ITicketRepository",
]
