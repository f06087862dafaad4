"""
Assist Heuristics
=================

Keyword rules and canned suggestions used when no language model is
configured, or when it fails.

Matching is plain substring search over the lower-cased title and
description. Category rules are checked in order and the first hit wins.
"""

from typing import Dict, List, Optional, Tuple

from servicedesk.assist.domain.entities import Categorization, Suggestion
from servicedesk.config import TicketCategory, TicketPriority

KEYWORD_CONFIDENCE = 0.6

CATEGORY_KEYWORDS: List[Tuple[str, List[str]]] = [
    (TicketCategory.HARDWARE, [
        "computer", "laptop", "desktop", "printer", "monitor", "keyboard",
        "mouse", "hardware", "device", "equipment",
    ]),
    (TicketCategory.SOFTWARE, [
        "software", "application", "app", "program", "bug", "error", "crash",
        "install", "update", "version",
    ]),
    (TicketCategory.NETWORK, [
        "network", "internet", "wifi", "connection", "vpn", "server", "email",
        "website", "online", "connectivity",
    ]),
    (TicketCategory.SECURITY, [
        "password", "login", "access", "permission", "security", "breach",
        "hack", "unauthorized", "locked",
    ]),
    (TicketCategory.ACCOUNT, [
        "account", "user", "profile", "settings", "preferences",
        "registration", "signup",
    ]),
]

PRIORITY_KEYWORDS: List[Tuple[str, List[str]]] = [
    (TicketPriority.URGENT, ["urgent", "critical", "down", "broken", "not working", "emergency", "asap"]),
    (TicketPriority.HIGH, ["important", "major", "severe", "serious", "priority"]),
    (TicketPriority.LOW, ["minor", "small", "cosmetic", "enhancement", "feature request"]),
]


def _first_match(text: str, rules: List[Tuple[str, List[str]]], default: str) -> str:
    for label, keywords in rules:
        if any(keyword in text for keyword in keywords):
            return label
    return default


def categorize_by_keywords(title: str, description: str) -> Categorization:
    text = f"{title} {description}".lower()
    return Categorization(
        category=_first_match(text, CATEGORY_KEYWORDS, TicketCategory.OTHER),
        priority=_first_match(text, PRIORITY_KEYWORDS, TicketPriority.MEDIUM),
        confidence=KEYWORD_CONFIDENCE,
    )


BASIC_SUGGESTIONS: Dict[str, List[Suggestion]] = {
    TicketCategory.HARDWARE: [
        Suggestion("Check Physical Connections",
                   "Verify all cables are properly connected. Check power supply and restart the device.", 0.8),
        Suggestion("Update Drivers",
                   "Download and install the latest drivers from the manufacturer's website.", 0.7),
    ],
    TicketCategory.SOFTWARE: [
        Suggestion("Restart Application",
                   "Close the application completely and restart it. Check for any error messages.", 0.8),
        Suggestion("Check for Updates",
                   "Look for software updates and install them if available.", 0.7),
    ],
    TicketCategory.NETWORK: [
        Suggestion("Check Internet Connection",
                   "Test internet connectivity by opening a web browser and visiting a website.", 0.9),
        Suggestion("Restart Network Equipment",
                   "Power cycle the router/modem by unplugging for 30 seconds and plugging back in.", 0.8),
    ],
    TicketCategory.SECURITY: [
        Suggestion("Reset Password",
                   "Use the password reset functionality or contact IT to reset the account password.", 0.9),
        Suggestion("Check Account Status",
                   "Verify the account is active and not locked. Check with IT if account needs to be unlocked.", 0.8),
    ],
}

GENERIC_SUGGESTIONS: List[Suggestion] = [
    Suggestion("Gather More Information",
               "Collect additional details about the issue, including error messages and steps to reproduce.", 0.6),
    Suggestion("Escalate to Senior Support",
               "If basic troubleshooting doesn't work, escalate to a senior support agent.", 0.5),
]


def basic_suggestions(category: Optional[str]) -> List[Suggestion]:
    return list(BASIC_SUGGESTIONS.get(category or "", GENERIC_SUGGESTIONS))
