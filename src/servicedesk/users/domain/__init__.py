"""
Users Domain Layer
==================

Contains the User entity. Framework-agnostic.
"""

from servicedesk.users.domain.entities import User

__all__ = ["User"]
