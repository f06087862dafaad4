"""
Service Desk Tracker
====================

IT-support ticket tracking with in-app and email notifications.
"""

__version__ = "1.0.0"
