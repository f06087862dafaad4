"""
Infrastructure Layer
====================

Adapters to the outside world:
- database: async SQLAlchemy engine and sessions
- mail: SMTP delivery
- llm: chat-completion clients
"""
