"""
Request Identity Dependencies
=============================

The authenticated identity arrives from the upstream gateway in the
``X-User-Id`` header; session and token issuance happen outside this
service. These dependencies resolve that header to a User and enforce
role requirements.
"""

from typing import Callable, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from servicedesk.core import AuthenticationException, PermissionDeniedException
from servicedesk.infrastructure.database import get_session
from servicedesk.users.domain import User
from servicedesk.users.infrastructure import SQLAlchemyUserRepository


async def get_current_user(
    x_user_id: Optional[int] = Header(None, description="Authenticated user id"),
    session: AsyncSession = Depends(get_session)
) -> User:
    """Resolve the requesting user; 401 when missing or unknown."""
    if x_user_id is None:
        raise AuthenticationException("Authentication required")

    user = await SQLAlchemyUserRepository(session).get_by_id(x_user_id)
    if user is None:
        raise AuthenticationException("Unknown user")
    return user


def require_roles(*roles: str) -> Callable:
    """Dependency factory rejecting users outside the given roles with 403."""

    async def _check(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise PermissionDeniedException()
        return user

    return _check
