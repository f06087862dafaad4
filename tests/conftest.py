"""
Pytest Configuration and Fixtures

Shared fixtures for all tests:
- In-memory SQLite database (schema from the ORM metadata)
- Seeded users: one admin, one agent, two end users
- Recording fake for outbound mail
- HTTP client over the ASGI app with dependency overrides
"""

from typing import Dict, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from servicedesk.config import Role
from servicedesk.core import TransportException
from servicedesk.infrastructure.database import (
    Base,
    build_session_maker,
    enable_sqlite_foreign_keys,
    get_session,
)
from servicedesk.main import app
from servicedesk.notifications.application import EmailDispatcher, IEmailTransport
from servicedesk.notifications.interfaces import get_email_dispatcher
from servicedesk.users.domain import User
from servicedesk.users.infrastructure import SQLAlchemyUserRepository

# Register every table on the metadata
import servicedesk.users.infrastructure.models  # noqa: F401
import servicedesk.tickets.infrastructure.models  # noqa: F401
import servicedesk.notifications.infrastructure.models  # noqa: F401


class FakeEmailTransport(IEmailTransport):
    """Records messages instead of talking SMTP."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[dict] = []

    async def send(self, to_address, subject, html_body, text_body):
        if self.fail:
            raise TransportException("connection refused", {"to": to_address})
        self.sent.append({
            "to": to_address,
            "subject": subject,
            "html": html_body,
            "text": text_body,
        })


def auth(user: User) -> Dict[str, str]:
    """Identity header the upstream gateway would set."""
    return {"X-User-Id": str(user.id)}


# Database fixtures

@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def users(session_maker) -> Dict[str, User]:
    """Seed the default directory and return it by nickname."""
    async with session_maker() as session:
        repo = SQLAlchemyUserRepository(session)
        seeded = {
            "admin": await repo.add("admin@company.com", "Admin", "User", Role.ADMIN, "IT"),
            "agent": await repo.add("agent1@company.com", "Agent", "One", Role.AGENT, "IT"),
            "alice": await repo.add("alice@company.com", "Alice", "Doe", Role.USER, "Engineering"),
            "bob": await repo.add("bob@company.com", "Bob", "Smith", Role.USER, "Marketing"),
        }
        await session.commit()
    return seeded


# Mail fixtures

@pytest.fixture
def email_transport():
    return FakeEmailTransport()


# API fixtures

@pytest_asyncio.fixture
async def client(session_maker, email_transport):
    """HTTP client bound to the test database and the fake mail transport."""

    async def override_get_session():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_email_dispatcher] = lambda: EmailDispatcher(email_transport)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
