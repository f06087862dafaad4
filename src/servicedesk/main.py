"""
Service Desk Tracker - Main Application
=======================================

IT-support ticket tracking with in-app and email notifications.

Modules:
- Users: request identity, staff directory, role management
- Tickets: tickets and comments, raising notification intents
- Notifications: recipient resolution, inbox, best-effort email
- Assist: category/priority and solution suggestions

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities and value objects
- Infrastructure: Database, SMTP, LLM
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Configuration and Core
from servicedesk.config import settings
from servicedesk.core import ApplicationException, ConfigurationException

# Infrastructure
from servicedesk.infrastructure.database import init_database, close_database, create_tables
from servicedesk.infrastructure.llm import build_llm_client
from servicedesk.infrastructure.mail import SMTPMailClient

# Notifications wiring
from servicedesk.notifications.application import EmailDispatcher
from servicedesk.notifications.infrastructure import SMTPEmailTransport

# Module Routers
from servicedesk.users.interfaces import users_router
from servicedesk.tickets.interfaces import tickets_router
from servicedesk.notifications.interfaces import notifications_router
from servicedesk.assist.interfaces import assist_router

# Middleware and logging
from servicedesk.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    application_exception_handler,
    validation_exception_handler,
    global_exception_handler
)
from servicedesk.shared.infrastructure.logging import setup_logging, get_logger

logger = get_logger(__name__)


def build_email_dispatcher() -> EmailDispatcher:
    """SMTP-backed dispatcher when credentials are configured, a no-op one otherwise."""
    if not settings.mail_enabled:
        logger.info("SMTP credentials not configured - notification email disabled")
        return EmailDispatcher(None)
    try:
        return EmailDispatcher(SMTPEmailTransport(SMTPMailClient()))
    except ConfigurationException as e:
        logger.warning(f"Notification email disabled: {e.message}")
        return EmailDispatcher(None)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Initialize database and create tables
    3. Build the notification email dispatcher
    4. Initialize the LLM client (optional)

    SHUTDOWN:
    1. Close database connections
    """
    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting Service Desk", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    logger.info("Initializing database")
    init_database()

    # Schema comes from the ORM metadata; there are no migrations.
    # If the database is unreachable the server still starts, and
    # database-dependent endpoints fail until it is back.
    logger.info("Creating database tables")
    try:
        await create_tables()
    except Exception as e:
        logger.warning(f"Database not available - running in degraded mode: {e}")

    app.state.email_dispatcher = build_email_dispatcher()

    logger.info("Initializing LLM client")
    try:
        app.state.llm_client = build_llm_client()
    except Exception as e:
        logger.warning(f"LLM client initialization failed: {e}")
        app.state.llm_client = None

    logger.info("Service Desk started successfully")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down Service Desk")
    await close_database()
    logger.info("Service Desk shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Service Desk API",
    description="""
    ## IT Support Ticket Tracker

    Users file tickets, agents work them, and everyone involved hears about it.

    ---

    ### Tickets
    - `GET /tickets` - Filtered, paginated ticket list
    - `POST /tickets` - File a ticket (notifies every agent and admin)
    - `PUT /tickets/{id}` - Update a ticket (status changes notify the reporter)
    - `POST /tickets/{id}/comments` - Comment (notifies the reporter)

    ### Notifications
    - `GET /notifications` - Inbox, newest first
    - `GET /notifications/unread-count` - Unread badge
    - `PUT /notifications/{id}/read`, `PUT /notifications/read-all`
    - `DELETE /notifications/{id}`

    ### Users
    - `GET /users/agents` - Staff directory
    - `PUT /users/{id}/role` - Role management (admin)

    ### Assistant
    - `POST /ai/categorize`, `POST /ai/suggestions`

    Requests are authenticated upstream; the user id arrives in `X-User-Id`.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Custom Middleware (from shared) ===
# Last added runs first: the correlation id is set before requests are logged
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# === Include Module Routers ===
app.include_router(users_router)
app.include_router(tickets_router)
app.include_router(notifications_router)
app.include_router(assist_router)


# === Health Check Endpoint ===

@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """
    Health check endpoint for load balancers and orchestrators.

    Reports which optional integrations are configured.
    """
    dispatcher = getattr(request.app.state, "email_dispatcher", None)
    checks = {
        "email": "enabled" if dispatcher is not None and dispatcher.enabled else "disabled",
        "llm_client": "available" if getattr(request.app.state, "llm_client", None) else "not_configured",
    }

    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": checks
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Service Desk",
        "version": settings.app_version,
        "architecture": "Clean Architecture / Modular Monolith",
        "docs": "/docs",
        "health": "/health",
        "modules": {
            "tickets": {"prefix": "/tickets"},
            "notifications": {"prefix": "/notifications"},
            "users": {"prefix": "/users"},
            "assist": {"prefix": "/ai"},
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "servicedesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
