"""
Assist Domain Entities
======================

Results produced by the ticket assistant.
"""

from dataclasses import dataclass

from servicedesk.config import TicketCategory, TicketPriority


@dataclass
class Categorization:
    """Suggested category and priority for a ticket."""
    category: str = TicketCategory.OTHER
    priority: str = TicketPriority.MEDIUM
    confidence: float = 0.6

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be between 0 and 1")


@dataclass
class Suggestion:
    """One remediation idea for the agent working a ticket."""
    title: str
    description: str
    confidence: float = 0.5
