"""
Tickets Infrastructure Layer
============================

Contains:
- Models: SQLAlchemy ORM models
- Repositories: Data access implementations
"""

from servicedesk.tickets.infrastructure.models import TicketModel, CommentModel
from servicedesk.tickets.infrastructure.repositories import SQLAlchemyTicketRepository

__all__ = [
    "TicketModel",
    "CommentModel",
    "SQLAlchemyTicketRepository",
]
