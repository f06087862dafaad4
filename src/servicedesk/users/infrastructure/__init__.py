"""
Users Infrastructure Layer
==========================

Contains:
- Models: SQLAlchemy ORM models
- Repositories: Data access implementations
"""

from servicedesk.users.infrastructure.models import UserModel
from servicedesk.users.infrastructure.repositories import SQLAlchemyUserRepository

__all__ = [
    "UserModel",
    "SQLAlchemyUserRepository",
]
