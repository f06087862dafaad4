"""
Core Exceptions
================

Errors raised by services and mapped to HTTP responses by status_code.

Mail and LLM failures are ExternalServiceExceptions; the notification
pipeline catches them rather than letting them reach the caller.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationException(ApplicationException):
    """Exception for validation errors."""

    status_code = 400


class AuthenticationException(ApplicationException):
    """Raised when the caller identity is missing or unknown."""

    status_code = 401


class PermissionDeniedException(ApplicationException):
    """Raised when the caller's role does not allow the operation."""

    status_code = 403

    def __init__(self, message: str = "Access denied", details: Optional[dict] = None):
        super().__init__(message, details)


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    status_code = 404

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(message, details)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class ExternalServiceException(ApplicationException):
    """Base exception for external service failures."""

    status_code = 502

    def __init__(
        self,
        service_name: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.service_name = service_name
        super().__init__(f"{service_name}: {message}", details)


class TransportException(ExternalServiceException):
    """Exception for outbound mail delivery failures."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("Mail Transport", message, details)


class LLMException(ExternalServiceException):
    """Exception for LLM API failures."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("LLM Service", message, details)
