"""
Unit Tests for Notification Dispatch

Tests:
- Recipient resolution for user and role targets
- Fan-out: one row per recipient, one email per intent
- Failure handling: errors are reported, never raised
- Email dispatcher no-op and failure behaviour
"""

from typing import List

import pytest

from servicedesk.config import NotificationType, Role
from servicedesk.notifications.application import (
    EmailDispatcher,
    INotificationRepository,
    IUserDirectory,
    NotificationDispatchService,
    RecipientResolver,
)
from servicedesk.notifications.domain import Notification, NotificationIntent, ToRole, ToUser
from tests.conftest import FakeEmailTransport


class FakeDirectory(IUserDirectory):
    """Directory over a fixed list of (id, email, role)."""

    def __init__(self, users):
        self.users = list(users)

    async def ids_by_roles(self, roles):
        return [uid for uid, _, role in self.users if role in roles]

    async def email_of(self, user_id):
        return next((email for uid, email, _ in self.users if uid == user_id), None)

    async def first_email_by_role(self, role):
        matches = sorted((uid, email) for uid, email, r in self.users if r == role)
        return matches[0][1] if matches else None


class FakeNotificationRepository(INotificationRepository):
    """In-memory store with commit/rollback of pending rows."""

    def __init__(self, fail_on_create: bool = False):
        self.fail_on_create = fail_on_create
        self.pending: List[Notification] = []
        self.committed: List[Notification] = []
        self.rollbacks = 0

    async def create(self, user_id, ticket_id, type, title, message):
        if self.fail_on_create:
            raise RuntimeError("database is locked")
        notification = Notification(
            id=len(self.committed) + len(self.pending) + 1,
            user_id=user_id,
            ticket_id=ticket_id,
            type=type,
            title=title,
            message=message,
        )
        self.pending.append(notification)
        return notification

    async def commit(self):
        self.committed.extend(self.pending)
        self.pending = []

    async def rollback(self):
        self.pending = []
        self.rollbacks += 1

    async def mark_read(self, notification_id, user_id):
        raise NotImplementedError

    async def mark_all_read(self, user_id):
        raise NotImplementedError

    async def unread_count(self, user_id):
        return sum(1 for n in self.committed if n.user_id == user_id and not n.is_read)

    async def delete(self, notification_id, user_id):
        raise NotImplementedError

    async def list_for_user(self, user_id, page, unread_only=False):
        raise NotImplementedError


DIRECTORY = [
    (1, "admin@company.com", Role.ADMIN),
    (2, "agent1@company.com", Role.AGENT),
    (3, "alice@company.com", Role.USER),
    (4, "bob@company.com", Role.USER),
    (5, "agent2@company.com", Role.AGENT),
]


def created_intent(ticket_id: int = 10) -> NotificationIntent:
    return NotificationIntent(
        target=ToRole(Role.AGENT),
        type=NotificationType.TICKET_CREATED,
        title="New Ticket Created",
        message=f"New ticket #{ticket_id}: Printer jammed",
        ticket_id=ticket_id,
    )


def status_intent(user_id: int = 3) -> NotificationIntent:
    return NotificationIntent(
        target=ToUser(user_id),
        type=NotificationType.STATUS_CHANGED,
        title="Ticket Status Updated",
        message="Ticket #10 status changed to in_progress",
        ticket_id=10,
    )


def build_service(directory=DIRECTORY, repository=None, transport=None):
    repository = repository or FakeNotificationRepository()
    service = NotificationDispatchService(
        repository=repository,
        resolver=RecipientResolver(FakeDirectory(directory)),
        email_dispatcher=EmailDispatcher(transport),
        client_url="http://desk.example",
    )
    return service, repository


class TestRecipientResolver:

    @pytest.mark.asyncio
    async def test_user_target_is_not_checked(self):
        resolver = RecipientResolver(FakeDirectory(DIRECTORY))

        assert await resolver.resolve(ToUser(999)) == [999]

    @pytest.mark.asyncio
    async def test_agent_role_reaches_all_staff(self):
        resolver = RecipientResolver(FakeDirectory(DIRECTORY))

        assert sorted(await resolver.resolve(ToRole(Role.AGENT))) == [1, 2, 5]

    @pytest.mark.asyncio
    async def test_admin_role_reaches_admins_only(self):
        resolver = RecipientResolver(FakeDirectory(DIRECTORY))

        assert await resolver.resolve(ToRole(Role.ADMIN)) == [1]

    @pytest.mark.asyncio
    async def test_empty_role_is_valid(self):
        resolver = RecipientResolver(FakeDirectory([(3, "alice@company.com", Role.USER)]))

        assert await resolver.resolve(ToRole(Role.AGENT)) == []

    @pytest.mark.asyncio
    async def test_role_email_goes_to_first_admin(self):
        directory = DIRECTORY + [(0, "root@company.com", Role.ADMIN)]
        resolver = RecipientResolver(FakeDirectory(directory))

        assert await resolver.email_address(ToRole(Role.AGENT)) == "root@company.com"

    @pytest.mark.asyncio
    async def test_user_email(self):
        resolver = RecipientResolver(FakeDirectory(DIRECTORY))

        assert await resolver.email_address(ToUser(3)) == "alice@company.com"


class TestDispatch:

    @pytest.mark.asyncio
    async def test_role_fan_out_one_row_per_recipient(self):
        transport = FakeEmailTransport()
        service, repository = build_service(transport=transport)

        result = await service.dispatch(created_intent())

        assert result.delivered
        assert sorted(result.recipient_ids) == [1, 2, 5]
        assert result.notifications_created == 3
        assert sorted(n.user_id for n in repository.committed) == [1, 2, 5]
        assert all(not n.is_read for n in repository.committed)
        assert all(n.ticket_id == 10 for n in repository.committed)

    @pytest.mark.asyncio
    async def test_exactly_one_email_per_intent(self):
        transport = FakeEmailTransport()
        service, _ = build_service(transport=transport)

        result = await service.dispatch(created_intent())

        assert result.email_sent
        assert len(transport.sent) == 1
        assert transport.sent[0]["to"] == "admin@company.com"
        assert transport.sent[0]["subject"] == "New Ticket Created"
        assert "http://desk.example/tickets/10" in transport.sent[0]["html"]

    @pytest.mark.asyncio
    async def test_user_target_emails_that_user(self):
        transport = FakeEmailTransport()
        service, repository = build_service(transport=transport)

        result = await service.dispatch(status_intent(3))

        assert result.recipient_ids == [3]
        assert [n.user_id for n in repository.committed] == [3]
        assert transport.sent[0]["to"] == "alice@company.com"
        assert transport.sent[0]["text"] == "Ticket #10 status changed to in_progress"

    @pytest.mark.asyncio
    async def test_role_with_no_holders_succeeds_without_email(self):
        transport = FakeEmailTransport()
        service, repository = build_service(directory=[(3, "alice@company.com", Role.USER)],
                                            transport=transport)

        result = await service.dispatch(created_intent())

        assert result.delivered
        assert result.recipient_ids == []
        assert result.notifications_created == 0
        assert not result.email_sent
        assert repository.committed == []
        assert transport.sent == []

    @pytest.mark.asyncio
    async def test_mail_not_configured_still_records_notifications(self):
        service, repository = build_service(transport=None)

        result = await service.dispatch(created_intent())

        assert result.delivered
        assert result.notifications_created == 3
        assert not result.email_sent

    @pytest.mark.asyncio
    async def test_transport_failure_keeps_notifications(self):
        transport = FakeEmailTransport(fail=True)
        service, repository = build_service(transport=transport)

        result = await service.dispatch(created_intent())

        assert result.delivered
        assert not result.email_sent
        assert len(repository.committed) == 3

    @pytest.mark.asyncio
    async def test_persistence_failure_is_reported_not_raised(self):
        repository = FakeNotificationRepository(fail_on_create=True)
        transport = FakeEmailTransport()
        service, _ = build_service(repository=repository, transport=transport)

        result = await service.dispatch(created_intent())

        assert not result.delivered
        assert "database is locked" in result.error
        assert repository.rollbacks == 1
        assert repository.committed == []
        assert transport.sent == []

    @pytest.mark.asyncio
    async def test_no_address_for_target(self):
        transport = FakeEmailTransport()
        service, repository = build_service(transport=transport)

        result = await service.dispatch(status_intent(999))

        assert result.delivered
        assert result.recipient_ids == [999]
        assert not result.email_sent
        assert transport.sent == []


class TestEmailDispatcher:

    @pytest.mark.asyncio
    async def test_without_transport_is_noop(self):
        dispatcher = EmailDispatcher(None)

        assert not dispatcher.enabled
        assert await dispatcher.send("a@b.c", "s", "<p>h</p>", "t") is False

    @pytest.mark.asyncio
    async def test_failure_reported_as_false(self):
        dispatcher = EmailDispatcher(FakeEmailTransport(fail=True))

        assert await dispatcher.send("a@b.c", "s", "<p>h</p>", "t") is False

    @pytest.mark.asyncio
    async def test_success(self):
        transport = FakeEmailTransport()
        dispatcher = EmailDispatcher(transport)

        assert await dispatcher.send("a@b.c", "s", "<p>h</p>", "t") is True
        assert transport.sent[0]["to"] == "a@b.c"
