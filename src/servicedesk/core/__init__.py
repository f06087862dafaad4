"""
Core Module
============

Shared core utilities and abstractions used across the application.

This module contains framework-agnostic code that defines the fundamental
building blocks of the system.
"""

from servicedesk.core.exceptions import (
    ApplicationException,
    ValidationException,
    AuthenticationException,
    PermissionDeniedException,
    ResourceNotFoundException,
    ConfigurationException,
    ExternalServiceException,
    TransportException,
    LLMException,
)

__all__ = [
    "ApplicationException",
    "ValidationException",
    "AuthenticationException",
    "PermissionDeniedException",
    "ResourceNotFoundException",
    "ConfigurationException",
    "ExternalServiceException",
    "TransportException",
    "LLMException",
]
