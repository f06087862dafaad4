#!/usr/bin/env python3
"""
Seed Default Users
==================

Creates the tables and the default accounts: one admin, one agent and two
end users. Safe to run repeatedly; existing emails are left alone.
"""

import asyncio

from servicedesk.config import Role
from servicedesk.infrastructure.database import (
    close_database,
    create_tables,
    get_session_context,
    init_database,
)
from servicedesk.shared.infrastructure.logging import get_logger, setup_logging
from servicedesk.users.infrastructure import SQLAlchemyUserRepository

logger = get_logger(__name__)

DEFAULT_USERS = [
    {"email": "admin@company.com", "first_name": "Admin", "last_name": "User",
     "role": Role.ADMIN, "department": "IT"},
    {"email": "agent1@company.com", "first_name": "Agent", "last_name": "One",
     "role": Role.AGENT, "department": "IT"},
    {"email": "john.doe@company.com", "first_name": "John", "last_name": "Doe",
     "role": Role.USER, "department": "Engineering"},
    {"email": "jane.smith@company.com", "first_name": "Jane", "last_name": "Smith",
     "role": Role.USER, "department": "Marketing"},
]


async def seed() -> int:
    """Insert missing default users; returns how many were created."""
    created = 0
    async with get_session_context() as session:
        users = SQLAlchemyUserRepository(session)
        for data in DEFAULT_USERS:
            if await users.get_by_email(data["email"]) is not None:
                continue
            user = await users.add(**data)
            logger.info("Seeded user", extra={"user_id": user.id, "email": user.email, "role": user.role})
            created += 1
    return created


async def main():
    setup_logging()
    init_database()
    try:
        await create_tables()
        created = await seed()
        print(f"Seeded {created} user(s)")
    finally:
        await close_database()


if __name__ == "__main__":
    asyncio.run(main())
