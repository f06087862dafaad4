"""
Users Controllers (API Routes)
==============================

FastAPI routes for the user directory.

Controllers are thin - they delegate to application services.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from servicedesk.config import Role, settings
from servicedesk.infrastructure.database import get_session
from servicedesk.shared.api.pagination import PageRequest, Pagination
from servicedesk.users.application import (
    UserService,
    RoleUpdateRequest,
    UserResponse,
    AgentInfo,
    UserEnvelope,
    UserRoleUpdatedResponse,
    AgentListResponse,
    UserListResponse,
)
from servicedesk.users.domain import User
from servicedesk.users.infrastructure import SQLAlchemyUserRepository
from servicedesk.users.interfaces.dependencies import get_current_user, require_roles

router = APIRouter(prefix="/users", tags=["Users"])


# ========== Dependencies ==========

async def get_user_service(
    session: AsyncSession = Depends(get_session)
) -> UserService:
    """Get user service instance."""
    return UserService(SQLAlchemyUserRepository(session))


# ========== Route Handlers ==========

@router.get("", response_model=UserListResponse, summary="List users (admin)")
async def list_users(
    role: Optional[str] = Query(None, description="Filter by role"),
    department: Optional[str] = Query(None, description="Filter by department"),
    search: Optional[str] = Query(None, description="Match first name, last name or email"),
    page: int = Query(1, description="Page number"),
    limit: int = Query(settings.list_page_size, description="Results per page"),
    _: User = Depends(require_roles(Role.ADMIN)),
    service: UserService = Depends(get_user_service)
):
    page_request = PageRequest.coerce(page, limit)
    users, total = await service.list_users(
        {"role": role, "department": department, "search": search},
        page_request
    )
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in users],
        pagination=Pagination.build(page_request.page, page_request.limit, total)
    )


@router.get("/agents", response_model=AgentListResponse, summary="Staff directory")
async def list_agents(
    _: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Agents and admins, ordered by name, for the assignment picker."""
    agents = await service.list_agents()
    return AgentListResponse(agents=[AgentInfo.model_validate(a) for a in agents])


@router.get("/{user_id}", response_model=UserEnvelope, summary="Get a user")
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    user = await service.get_user(current_user, user_id)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.put("/{user_id}/role", response_model=UserRoleUpdatedResponse, summary="Change a user's role (admin)")
async def update_user_role(
    user_id: int,
    payload: RoleUpdateRequest,
    current_user: User = Depends(require_roles(Role.ADMIN)),
    service: UserService = Depends(get_user_service)
):
    user = await service.change_role(current_user, user_id, payload.role)
    return UserRoleUpdatedResponse(
        message="User role updated successfully",
        user=UserResponse.model_validate(user)
    )


# Export router for inclusion in main app
users_router = router
