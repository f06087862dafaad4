"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from typing import Dict, List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="servicedesk", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/servicedesk",
        description="Async SQLAlchemy connection URL"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)

    # ========== Outbound Mail (SMTP) ==========
    smtp_host: Optional[str] = Field(default=None, description="SMTP server host")
    smtp_port: int = Field(default=587, description="SMTP server port", ge=1, le=65535)
    smtp_user: Optional[str] = Field(default=None, description="SMTP username")
    smtp_password: Optional[str] = Field(default=None, description="SMTP password")
    smtp_from: Optional[str] = Field(
        default=None,
        description="Sender address (defaults to SMTP username)"
    )
    smtp_start_tls: bool = Field(default=True, description="Upgrade the connection with STARTTLS")
    smtp_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for SMTP operations",
        ge=0.1,
        le=120
    )

    # ========== Web Client ==========
    client_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the web client, used for links in emails"
    )

    # ========== Notifications ==========
    notifications_page_size: int = Field(default=20, description="Default notifications page size", ge=1)
    list_page_size: int = Field(default=10, description="Default ticket and user list page size", ge=1)

    # ========== LLM (AI assistant) ==========
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    llm_model: str = Field(default="gpt-3.5-turbo", description="Chat model for the assistant")
    llm_temperature: float = Field(default=0.3, description="Default temperature", ge=0.0, le=1.0)
    mock_llm: bool = Field(
        default=False,
        description="Use mock LLM responses for testing (no API calls)"
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "test", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level

    @property
    def mail_enabled(self) -> bool:
        """Outbound mail is attempted only when credentials are configured."""
        return bool(self.smtp_user and self.smtp_password)

    @property
    def mail_sender(self) -> Optional[str]:
        return self.smtp_from or self.smtp_user


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class Role(str):
    """User roles."""
    USER = "user"
    AGENT = "agent"
    ADMIN = "admin"


class TicketStatus(str):
    """Ticket workflow statuses (any status may follow any other)."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(str):
    """Ticket priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class NotificationType(str):
    """Tags describing the event that produced a notification."""
    TICKET_CREATED = "ticket_created"
    STATUS_CHANGED = "status_changed"
    COMMENT_ADDED = "comment_added"


class TicketCategory(str):
    """Categories suggested by the assistant."""
    HARDWARE = "Hardware"
    SOFTWARE = "Software"
    NETWORK = "Network"
    SECURITY = "Security"
    ACCOUNT = "Account"
    OTHER = "Other"


# ========== Lists for validation ==========

VALID_ROLES = [Role.USER, Role.AGENT, Role.ADMIN]
STAFF_ROLES = [Role.AGENT, Role.ADMIN]
VALID_STATUSES = [
    TicketStatus.TODO, TicketStatus.IN_PROGRESS,
    TicketStatus.RESOLVED, TicketStatus.CLOSED
]
VALID_PRIORITIES = [
    TicketPriority.LOW, TicketPriority.MEDIUM,
    TicketPriority.HIGH, TicketPriority.URGENT
]
VALID_NOTIFICATION_TYPES = [
    NotificationType.TICKET_CREATED,
    NotificationType.STATUS_CHANGED,
    NotificationType.COMMENT_ADDED
]
TICKET_CATEGORIES = [
    TicketCategory.HARDWARE, TicketCategory.SOFTWARE, TicketCategory.NETWORK,
    TicketCategory.SECURITY, TicketCategory.ACCOUNT, TicketCategory.OTHER
]

# Roles reached by a role-targeted notification. Admins hold every agent duty.
ROLE_RECIPIENTS: Dict[str, List[str]] = {
    Role.AGENT: [Role.AGENT, Role.ADMIN],
    Role.ADMIN: [Role.ADMIN],
    Role.USER: [Role.USER],
}
