"""
Tickets Interfaces Layer
========================

Contains:
- Controllers: FastAPI route handlers for tickets and comments
"""

from servicedesk.tickets.interfaces.controllers import tickets_router

__all__ = ["tickets_router"]
