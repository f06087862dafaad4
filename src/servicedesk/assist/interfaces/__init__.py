"""
Assist Interfaces Layer
=======================
"""

from servicedesk.assist.interfaces.controllers import assist_router

__all__ = ["assist_router"]
