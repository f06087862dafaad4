"""
Assist Application Layer
========================

Contains:
- Services: AssistService
- DTOs: Data transfer objects for API serialization
"""

from servicedesk.assist.application.dto import (
    CategorizeRequest,
    SuggestionsRequest,
    CategorizeResponse,
    SuggestionResponse,
    SuggestionsResponse,
)
from servicedesk.assist.application.services import AssistService, extract_json

__all__ = [
    "CategorizeRequest",
    "SuggestionsRequest",
    "CategorizeResponse",
    "SuggestionResponse",
    "SuggestionsResponse",
    "AssistService",
    "extract_json",
]
