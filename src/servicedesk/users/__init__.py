"""
Users Module
============

Bounded Context for the people who file and work tickets.

Responsibilities:
- Resolve the authenticated identity of each request
- Staff directory for assignment and role-targeted notifications
- Admin-only role management
"""
