"""
User Domain Entities
====================

Identity and role of the people who file and work tickets.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from servicedesk.config import Role, STAFF_ROLES, VALID_ROLES


@dataclass
class User:
    """
    A registered user.

    Role decides what the user may do and which role-targeted
    notifications reach them.
    """
    id: int
    email: str
    first_name: str
    last_name: str
    role: str = Role.USER
    department: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.role not in VALID_ROLES:
            raise ValueError(f"Unknown role: {self.role}")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_staff(self) -> bool:
        """Agents and admins work tickets."""
        return self.role in STAFF_ROLES

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can_view_user(self, user_id: int) -> bool:
        """Users see their own profile; admins see everyone."""
        return self.is_admin or self.id == user_id
