"""
Tickets Controllers (API Routes)
================================

FastAPI routes for tickets and comments.

Controllers are thin - they delegate to application services.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from servicedesk.config import settings
from servicedesk.infrastructure.database import get_session
from servicedesk.notifications.application import NotificationDispatchService
from servicedesk.notifications.interfaces import get_dispatch_service
from servicedesk.shared.api.pagination import PageRequest, Pagination
from servicedesk.tickets.application import (
    TicketService,
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
from servicedesk.tickets.infrastructure import SQLAlchemyTicketRepository
from servicedesk.users.domain import User
from servicedesk.users.infrastructure import SQLAlchemyUserRepository
from servicedesk.users.interfaces import get_current_user

router = APIRouter(prefix="/tickets", tags=["Tickets"])


# ========== Dependencies ==========

async def get_ticket_service(
    session: AsyncSession = Depends(get_session),
    dispatcher: NotificationDispatchService = Depends(get_dispatch_service)
) -> TicketService:
    """Get ticket service instance."""
    return TicketService(
        tickets=SQLAlchemyTicketRepository(session),
        users=SQLAlchemyUserRepository(session),
        dispatcher=dispatcher,
    )


# ========== Route Handlers ==========

@router.get("", response_model=TicketListResponse, summary="List tickets")
async def list_tickets(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    priority: Optional[str] = Query(None, description="Filter by priority"),
    assignee: Optional[int] = Query(None, description="Filter by assignee id"),
    reporter: Optional[int] = Query(None, description="Filter by reporter id"),
    category: Optional[str] = Query(None, description="Filter by category"),
    search: Optional[str] = Query(None, description="Match title or description"),
    page: int = Query(1, description="Page number"),
    limit: int = Query(settings.list_page_size, description="Results per page"),
    user: User = Depends(get_current_user),
    service: TicketService = Depends(get_ticket_service)
):
    """Newest first. Users only see tickets they reported."""
    page_request = PageRequest.coerce(page, limit)
    filters = {
        "status": status_filter,
        "priority": priority,
        "assignee": assignee,
        "reporter": reporter,
        "category": category,
        "search": search,
    }
    tickets, total = await service.list_tickets(user, filters, page_request)
    return TicketListResponse(
        tickets=[TicketResponse.model_validate(t) for t in tickets],
        pagination=Pagination.build(page_request.page, page_request.limit, total)
    )


@router.get("/stats/overview", response_model=TicketStatsResponse, summary="Ticket statistics (staff)")
async def ticket_stats(
    user: User = Depends(get_current_user),
    service: TicketService = Depends(get_ticket_service)
):
    return TicketStatsResponse(**await service.get_stats(user))


@router.get("/{ticket_id}", response_model=TicketDetailResponse, summary="Get a ticket")
async def get_ticket(
    ticket_id: int,
    user: User = Depends(get_current_user),
    service: TicketService = Depends(get_ticket_service)
):
    ticket, comments = await service.get_ticket(user, ticket_id)
    return TicketDetailResponse(
        ticket=TicketResponse.model_validate(ticket),
        comments=[CommentResponse.model_validate(c) for c in comments]
    )


@router.post(
    "",
    response_model=TicketMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="File a ticket"
)
async def create_ticket(
    payload: TicketCreateRequest,
    user: User = Depends(get_current_user),
    service: TicketService = Depends(get_ticket_service)
):
    """Notifies every agent and admin."""
    ticket = await service.create_ticket(user, payload)
    return TicketMutationResponse(
        message="Ticket created successfully",
        ticket=TicketResponse.model_validate(ticket)
    )


@router.put("/{ticket_id}", response_model=TicketMutationResponse, summary="Update a ticket")
async def update_ticket(
    ticket_id: int,
    payload: TicketUpdateRequest,
    user: User = Depends(get_current_user),
    service: TicketService = Depends(get_ticket_service)
):
    """Notifies the reporter when the status changes."""
    ticket = await service.update_ticket(user, ticket_id, payload)
    return TicketMutationResponse(
        message="Ticket updated successfully",
        ticket=TicketResponse.model_validate(ticket)
    )


@router.post(
    "/{ticket_id}/comments",
    response_model=CommentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a ticket"
)
async def add_comment(
    ticket_id: int,
    payload: CommentCreateRequest,
    user: User = Depends(get_current_user),
    service: TicketService = Depends(get_ticket_service)
):
    comment = await service.add_comment(user, ticket_id, payload)
    return CommentCreatedResponse(
        message="Comment added successfully",
        comment=CommentResponse.model_validate(comment)
    )


# Export router for inclusion in main app
tickets_router = router
