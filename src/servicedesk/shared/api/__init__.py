"""
Shared API Layer
================

Middleware, exception handlers and pagination helpers reused by every
router.
"""
