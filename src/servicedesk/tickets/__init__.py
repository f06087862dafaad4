"""
Tickets Module
==============

Bounded Context for support tickets and their comments.

Responsibilities:
- File, read, filter and update tickets
- Comment threads
- Raise notification intents on creation, status change and new comments
"""
