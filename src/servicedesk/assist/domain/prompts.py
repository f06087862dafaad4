"""
Assist Prompt Builders
======================

Prompt templates for the categorization and suggestion calls.
"""

from typing import Optional

from servicedesk.config import TICKET_CATEGORIES, VALID_PRIORITIES


class CategorizationPromptBuilder:
    """Builds prompts asking for a category, priority and confidence."""

    SYSTEM_PROMPT = (
        "You are an IT support triage assistant. "
        "You answer with a single JSON object and nothing else."
    )

    @staticmethod
    def get_system_prompt() -> str:
        return CategorizationPromptBuilder.SYSTEM_PROMPT

    @staticmethod
    def build_prompt(title: str, description: str) -> str:
        return f"""Analyze this IT support ticket and categorize it. Return a JSON response with:
- category: one of {", ".join(TICKET_CATEGORIES)}
- priority: one of {", ".join(VALID_PRIORITIES)}
- confidence: a number between 0 and 1

Ticket Title: {title}
Description: {description}

Category guidelines:
- Hardware: Issues with physical devices, computers, printers, etc.
- Software: Application problems, bugs, installation issues
- Network: Connectivity, internet, VPN, server issues
- Security: Password resets, access issues, security concerns
- Account: User account management, permissions
- Other: Anything that doesn't fit the above categories

Priority guidelines:
- urgent: System down, security breach, critical business impact
- high: Major functionality affected, multiple users impacted
- medium: Minor issues, single user affected
- low: Cosmetic issues, feature requests

Return only valid JSON."""


class SuggestionPromptBuilder:
    """Builds prompts asking for remediation steps."""

    SYSTEM_PROMPT = (
        "You are a senior IT support engineer helping agents resolve tickets. "
        "You answer with a JSON array and nothing else."
    )

    @staticmethod
    def get_system_prompt() -> str:
        return SuggestionPromptBuilder.SYSTEM_PROMPT

    @staticmethod
    def build_prompt(title: str, description: str, category: Optional[str] = None) -> str:
        return f"""Based on this IT support ticket, provide 3-5 solution suggestions. Return a JSON array of objects with:
- title: Brief title of the solution
- description: Detailed steps to resolve the issue
- confidence: Number between 0 and 1 indicating how likely this solution will work

Ticket Title: {title}
Description: {description}
Category: {category or "Unknown"}

Focus on practical, step-by-step solutions that IT support agents can follow.
Include common troubleshooting steps, configuration changes, and escalation paths.

Return only a valid JSON array."""
