"""
Users Application Services
==========================

Directory lookups and role management.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from servicedesk.config import STAFF_ROLES, VALID_ROLES
from servicedesk.core import (
    PermissionDeniedException,
    ResourceNotFoundException,
    ValidationException,
)
from servicedesk.shared.api.pagination import PageRequest
from servicedesk.shared.infrastructure.logging import get_logger
from servicedesk.users.domain import User

logger = get_logger(__name__)


# ========== Repository Interfaces ==========

class IUserRepository(ABC):
    """Interface for user data access."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by id."""

    @abstractmethod
    async def list_by_roles(self, roles: Sequence[str]) -> List[User]:
        """All users holding one of the roles, ordered by name."""

    @abstractmethod
    async def first_by_role(self, role: str) -> Optional[User]:
        """Lowest-id user holding the role."""

    @abstractmethod
    async def search(self, filters: dict, page: PageRequest) -> Tuple[List[User], int]:
        """Filtered page of users and the total match count."""

    @abstractmethod
    async def update_role(self, user_id: int, role: str) -> Optional[User]:
        """Set a user's role; None when the user does not exist."""


# ========== Application Services ==========

class UserService:
    """Use cases over the user directory."""

    def __init__(self, users: IUserRepository):
        self._users = users

    async def get_user(self, requester: User, user_id: int) -> User:
        if not requester.can_view_user(user_id):
            raise PermissionDeniedException()

        user = await self._users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", str(user_id))
        return user

    async def list_agents(self) -> List[User]:
        return await self._users.list_by_roles(STAFF_ROLES)

    async def list_users(self, filters: dict, page: PageRequest) -> Tuple[List[User], int]:
        return await self._users.search(filters, page)

    async def change_role(self, requester: User, user_id: int, role: str) -> User:
        """Admins only. Takes effect for notifications dispatched afterwards."""
        if not requester.is_admin:
            raise PermissionDeniedException()
        if role not in VALID_ROLES:
            raise ValidationException("Valid role is required")

        user = await self._users.update_role(user_id, role)
        if user is None:
            raise ResourceNotFoundException("User", str(user_id))

        logger.info(
            "User role updated",
            extra={"user_id": user_id, "role": role, "changed_by": requester.id}
        )
        return user
