"""
Integration Tests for the Notification Store (SQLite)

Tests:
- Creation defaults and ticket title join
- Owner-only mark read / delete
- Idempotent mark read and mark all read
- Pagination ordering and unread filter
- Cascade delete with the ticket
"""

import pytest
from sqlalchemy import delete

from servicedesk.config import NotificationType
from servicedesk.core import ResourceNotFoundException
from servicedesk.notifications.application import NotificationService
from servicedesk.notifications.infrastructure import SQLAlchemyNotificationRepository
from servicedesk.shared.api.pagination import PageRequest
from servicedesk.tickets.infrastructure import SQLAlchemyTicketRepository, TicketModel


async def add_notification(repo, user_id, ticket_id=None, n=1):
    return await repo.create(
        user_id=user_id,
        ticket_id=ticket_id,
        type=NotificationType.STATUS_CHANGED,
        title="Ticket Status Updated",
        message=f"Ticket #{ticket_id} status changed to resolved ({n})",
    )


class TestCreate:

    @pytest.mark.asyncio
    async def test_created_unread(self, session, users):
        repo = SQLAlchemyNotificationRepository(session)

        notification = await add_notification(repo, users["alice"].id)
        await repo.commit()

        assert notification.id is not None
        assert not notification.is_read
        assert notification.created_at is not None
        assert await repo.unread_count(users["alice"].id) == 1

    @pytest.mark.asyncio
    async def test_list_carries_ticket_title(self, session, users):
        ticket = await SQLAlchemyTicketRepository(session).create(
            users["alice"].id, "Printer on fire", "Smoke is coming out of it", "urgent", None
        )
        repo = SQLAlchemyNotificationRepository(session)
        await add_notification(repo, users["alice"].id, ticket.id)
        await add_notification(repo, users["alice"].id, None)
        await repo.commit()

        items, total = await repo.list_for_user(users["alice"].id, PageRequest(1, 10))

        assert total == 2
        titles = {n.ticket_id: n.ticket_title for n in items}
        assert titles == {ticket.id: "Printer on fire", None: None}


class TestOwnership:

    @pytest.mark.asyncio
    async def test_mark_read_idempotent(self, session, users):
        repo = SQLAlchemyNotificationRepository(session)
        notification = await add_notification(repo, users["alice"].id)
        await repo.commit()

        first = await repo.mark_read(notification.id, users["alice"].id)
        second = await repo.mark_read(notification.id, users["alice"].id)

        assert first.is_read and second.is_read
        assert await repo.unread_count(users["alice"].id) == 0

    @pytest.mark.asyncio
    async def test_cannot_touch_someone_elses(self, session, users):
        repo = SQLAlchemyNotificationRepository(session)
        notification = await add_notification(repo, users["alice"].id)
        await repo.commit()
        service = NotificationService(repo)

        with pytest.raises(ResourceNotFoundException):
            await service.mark_read(notification.id, users["bob"].id)
        with pytest.raises(ResourceNotFoundException):
            await service.delete(notification.id, users["bob"].id)

        assert await repo.unread_count(users["alice"].id) == 1

    @pytest.mark.asyncio
    async def test_delete_is_hard(self, session, users):
        repo = SQLAlchemyNotificationRepository(session)
        notification = await add_notification(repo, users["alice"].id)
        await repo.commit()
        service = NotificationService(repo)

        await service.delete(notification.id, users["alice"].id)

        with pytest.raises(ResourceNotFoundException):
            await service.delete(notification.id, users["alice"].id)
        _, total = await repo.list_for_user(users["alice"].id, PageRequest(1, 10))
        assert total == 0


class TestMarkAllRead:

    @pytest.mark.asyncio
    async def test_counts_flipped_rows_only(self, session, users):
        repo = SQLAlchemyNotificationRepository(session)
        for n in range(3):
            await add_notification(repo, users["alice"].id, n=n)
        await add_notification(repo, users["bob"].id)
        await repo.commit()

        assert await repo.mark_all_read(users["alice"].id) == 3
        assert await repo.mark_all_read(users["alice"].id) == 0
        assert await repo.unread_count(users["alice"].id) == 0
        assert await repo.unread_count(users["bob"].id) == 1


class TestPagination:

    @pytest.mark.asyncio
    async def test_pages_cover_everything_once_newest_first(self, session, users):
        repo = SQLAlchemyNotificationRepository(session)
        created = [await add_notification(repo, users["alice"].id, n=n) for n in range(7)]
        await repo.commit()

        seen = []
        for page in (1, 2, 3):
            items, total = await repo.list_for_user(users["alice"].id, PageRequest(page, 3))
            assert total == 7
            seen.extend(n.id for n in items)

        assert len(seen) == 7
        assert set(seen) == {n.id for n in created}
        assert seen == sorted(seen, reverse=True)

    @pytest.mark.asyncio
    async def test_unread_only(self, session, users):
        repo = SQLAlchemyNotificationRepository(session)
        first = await add_notification(repo, users["alice"].id, n=1)
        await add_notification(repo, users["alice"].id, n=2)
        await repo.commit()
        await repo.mark_read(first.id, users["alice"].id)

        items, total = await repo.list_for_user(users["alice"].id, PageRequest(1, 10), unread_only=True)

        assert total == 1
        assert all(not n.is_read for n in items)


class TestCascade:

    @pytest.mark.asyncio
    async def test_removed_with_ticket(self, session, users):
        ticket = await SQLAlchemyTicketRepository(session).create(
            users["alice"].id, "Laptop broken", "The screen is cracked", "high", "Hardware"
        )
        repo = SQLAlchemyNotificationRepository(session)
        await add_notification(repo, users["alice"].id, ticket.id)
        await repo.commit()

        await session.execute(delete(TicketModel).where(TicketModel.id == ticket.id))
        await session.commit()

        assert await repo.unread_count(users["alice"].id) == 0
