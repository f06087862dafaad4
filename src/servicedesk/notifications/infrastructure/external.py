"""
Notifications External Adapters
===============================

Bind the notification module's ports to the rest of the system:
- the user directory (users module repository)
- outbound mail (SMTP client)
"""

from typing import List, Optional

from servicedesk.infrastructure.mail import SMTPMailClient
from servicedesk.notifications.application import IEmailTransport, IUserDirectory
from servicedesk.users.application import IUserRepository


class UserDirectoryAdapter(IUserDirectory):
    """Answers directory questions from the users repository."""

    def __init__(self, users: IUserRepository):
        self._users = users

    async def ids_by_roles(self, roles: List[str]) -> List[int]:
        return [u.id for u in await self._users.list_by_roles(roles)]

    async def email_of(self, user_id: int) -> Optional[str]:
        user = await self._users.get_by_id(user_id)
        return user.email if user else None

    async def first_email_by_role(self, role: str) -> Optional[str]:
        user = await self._users.first_by_role(role)
        return user.email if user else None


class SMTPEmailTransport(IEmailTransport):
    """Sends notification mail through the shared SMTP client."""

    def __init__(self, client: SMTPMailClient):
        self._client = client

    async def send(self, to_address: str, subject: str, html_body: str,
                   text_body: str) -> None:
        await self._client.send(to_address, subject, html_body, text_body)
