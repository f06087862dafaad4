"""
Notification Value Objects
==========================

Immutable descriptions of who a notification is for and what it says.

A recipient target is a tagged union: exactly one of ToUser or ToRole.
Having both or neither cannot be expressed.
"""

import html
from dataclasses import dataclass
from typing import Optional, Union

from servicedesk.config import VALID_NOTIFICATION_TYPES, VALID_ROLES
from servicedesk.core import ValidationException


@dataclass(frozen=True)
class ToUser:
    """Deliver to one user, by id."""
    user_id: int


@dataclass(frozen=True)
class ToRole:
    """Deliver to everyone holding a role at dispatch time."""
    role: str

    def __post_init__(self):
        if self.role not in VALID_ROLES:
            raise ValidationException(f"Unknown role: {self.role}")


RecipientTarget = Union[ToUser, ToRole]


@dataclass(frozen=True)
class NotificationIntent:
    """
    A request to notify someone about a ticket event.

    Produced by ticket triggers and consumed by the dispatch service.
    """
    target: RecipientTarget
    type: str
    title: str
    message: str
    ticket_id: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.target, (ToUser, ToRole)):
            raise ValidationException("Notification target must be a user or a role")
        if self.type not in VALID_NOTIFICATION_TYPES:
            raise ValidationException(f"Unknown notification type: {self.type}")
        if not self.title or not self.message:
            raise ValidationException("Notification title and message are required")


@dataclass(frozen=True)
class EmailContent:
    """Rendered email for one intent."""
    subject: str
    html_body: str
    text_body: str

    @classmethod
    def render(cls, intent: NotificationIntent, client_url: str) -> "EmailContent":
        """
        Render the email for an intent.

        Title and message are HTML-escaped. A link to the ticket is added
        when the intent has one.
        """
        parts = [
            f"<h2>{html.escape(intent.title)}</h2>",
            f"<p>{html.escape(intent.message)}</p>",
        ]
        if intent.ticket_id is not None:
            link = f"{client_url.rstrip('/')}/tickets/{intent.ticket_id}"
            parts.append(
                f'<p><a href="{html.escape(link, quote=True)}">'
                f"View Ticket #{intent.ticket_id}</a></p>"
            )
        parts.append(
            "<hr><p><small>This is an automated message from the IT Support "
            "Ticket System.</small></p>"
        )

        return cls(
            subject=intent.title,
            html_body="\n".join(parts),
            text_body=intent.message,
        )
