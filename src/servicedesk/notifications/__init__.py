"""
Notifications Module
====================

Bounded Context for in-app notifications and notification email.

Responsibilities:
- Resolve a recipient target (one user or a role) to user ids
- Persist one notification per recipient, then send one best-effort email
- Inbox operations: list, unread count, mark read, mark all read, delete
"""
