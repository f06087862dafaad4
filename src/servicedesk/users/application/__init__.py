"""
Users Application Layer
=======================

Contains:
- Services: directory lookups and role management
- DTOs: Data transfer objects for API serialization
"""

from servicedesk.users.application.dto import (
    RoleUpdateRequest,
    UserResponse,
    AgentInfo,
    UserEnvelope,
    UserRoleUpdatedResponse,
    AgentListResponse,
    UserListResponse,
)
from servicedesk.users.application.services import IUserRepository, UserService

__all__ = [
    # DTOs
    "RoleUpdateRequest",
    "UserResponse",
    "AgentInfo",
    "UserEnvelope",
    "UserRoleUpdatedResponse",
    "AgentListResponse",
    "UserListResponse",
    # Services
    "UserService",
    # Repository Interfaces
    "IUserRepository",
]
