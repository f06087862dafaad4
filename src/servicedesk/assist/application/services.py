"""
Assist Application Services
===========================

Category/priority suggestions and remediation ideas for tickets.

A language model is used when one is configured; any failure falls back to
the keyword heuristics so the assistant always answers.
"""

import json
from typing import Any, List, Optional

from servicedesk.assist.domain import (
    Categorization,
    CategorizationPromptBuilder,
    Suggestion,
    SuggestionPromptBuilder,
    basic_suggestions,
    categorize_by_keywords,
)
from servicedesk.config import TICKET_CATEGORIES, TicketCategory, TicketPriority, VALID_PRIORITIES, settings
from servicedesk.core import LLMException
from servicedesk.infrastructure.llm import ILLMClient
from servicedesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LLM_CONFIDENCE = 0.7
DEFAULT_SUGGESTION_CONFIDENCE = 0.5


def extract_json(text: str) -> Any:
    """Parse JSON from a model reply, tolerating a fenced code block."""
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]
    return json.loads(text.strip())


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class AssistService:
    """Ticket assistant backed by an optional language model."""

    def __init__(self, llm_client: Optional[ILLMClient] = None):
        self._llm = llm_client

    async def categorize(self, title: str, description: str) -> Categorization:
        if self._llm is None:
            return categorize_by_keywords(title, description)

        messages = [
            {"role": "system", "content": CategorizationPromptBuilder.get_system_prompt()},
            {"role": "user", "content": CategorizationPromptBuilder.build_prompt(title, description)},
        ]
        try:
            response = await self._llm.chat_completion(
                messages=messages,
                temperature=settings.llm_temperature,
                max_tokens=200,
                operation="categorize"
            )
            data = extract_json(response.content)

            category = data.get("category")
            priority = data.get("priority")
            confidence = data.get("confidence")
            if category not in TICKET_CATEGORIES:
                category = TicketCategory.OTHER
            if priority not in VALID_PRIORITIES:
                priority = TicketPriority.MEDIUM
            if not _is_number(confidence) or not 0.0 <= confidence <= 1.0:
                confidence = DEFAULT_LLM_CONFIDENCE

            return Categorization(category=category, priority=priority, confidence=float(confidence))

        except (LLMException, ValueError, TypeError, AttributeError) as e:
            logger.warning("Categorization fell back to keywords", extra={"error": str(e)})
            return categorize_by_keywords(title, description)

    async def suggest(self, title: str, description: str,
                      category: Optional[str] = None) -> List[Suggestion]:
        if self._llm is None:
            return basic_suggestions(category)

        messages = [
            {"role": "system", "content": SuggestionPromptBuilder.get_system_prompt()},
            {"role": "user", "content": SuggestionPromptBuilder.build_prompt(title, description, category)},
        ]
        try:
            response = await self._llm.chat_completion(
                messages=messages,
                temperature=0.4,
                max_tokens=1000,
                operation="suggestions"
            )
            data = extract_json(response.content)
            if not isinstance(data, list):
                return basic_suggestions(category)

            return [
                Suggestion(
                    title=item.get("title") or "Solution",
                    description=item.get("description") or "No description available",
                    confidence=(
                        float(item["confidence"]) if _is_number(item.get("confidence"))
                        else DEFAULT_SUGGESTION_CONFIDENCE
                    ),
                )
                for item in data
            ]

        except (LLMException, ValueError, TypeError, AttributeError) as e:
            logger.warning("Suggestions fell back to canned answers", extra={"error": str(e)})
            return basic_suggestions(category)
