"""
Users Interfaces Layer
======================

Contains:
- Controllers: FastAPI route handlers for the user directory
- Dependencies: request identity resolution and role checks
"""

from servicedesk.users.interfaces.controllers import users_router
from servicedesk.users.interfaces.dependencies import get_current_user, require_roles

__all__ = ["users_router", "get_current_user", "require_roles"]
