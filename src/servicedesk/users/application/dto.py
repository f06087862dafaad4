"""
Users Application DTOs
======================

Pydantic models for request/response validation.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from servicedesk.shared.api.pagination import Pagination


RoleStr = Literal["user", "agent", "admin"]


# ========== Request DTOs ==========

class RoleUpdateRequest(BaseModel):
    """Request model for changing a user's role."""
    role: RoleStr = Field(..., description="New role")


# ========== Response DTOs ==========

class UserResponse(BaseModel):
    """Public view of a user."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    role: RoleStr
    department: Optional[str] = None
    created_at: Optional[datetime] = None


class AgentInfo(BaseModel):
    """Entry of the staff directory used for assignment."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    department: Optional[str] = None


class UserEnvelope(BaseModel):
    user: UserResponse


class UserRoleUpdatedResponse(BaseModel):
    message: str
    user: UserResponse


class AgentListResponse(BaseModel):
    agents: List[AgentInfo]


class UserListResponse(BaseModel):
    users: List[UserResponse]
    pagination: Pagination
