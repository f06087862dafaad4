"""
Assist Domain Layer
===================

Contains:
- Entities: Categorization, Suggestion
- Heuristics: keyword classifier and canned suggestions
- Prompts: prompt builders for the language model
"""

from servicedesk.assist.domain.entities import Categorization, Suggestion
from servicedesk.assist.domain.heuristics import (
    KEYWORD_CONFIDENCE,
    categorize_by_keywords,
    basic_suggestions,
)
from servicedesk.assist.domain.prompts import (
    CategorizationPromptBuilder,
    SuggestionPromptBuilder,
)

__all__ = [
    "Categorization",
    "Suggestion",
    "KEYWORD_CONFIDENCE",
    "categorize_by_keywords",
    "basic_suggestions",
    "CategorizationPromptBuilder",
    "SuggestionPromptBuilder",
]
