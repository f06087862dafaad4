"""
Shared Kernel Module
====================

Generic infrastructure used across all bounded contexts (users, tickets,
notifications, assist): logging, HTTP middleware, pagination.

DO NOT add ticket or notification business logic to the shared kernel.
"""
