"""
Notifications Infrastructure Repositories
=========================================

SQLAlchemy implementation of the notification store.

Every read and write is scoped to the owning user: a notification that
belongs to someone else behaves exactly like one that does not exist.
"""

from typing import List, Optional, Tuple

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from servicedesk.notifications.application import INotificationRepository
from servicedesk.notifications.domain import Notification
from servicedesk.notifications.infrastructure.models import NotificationModel
from servicedesk.shared.api.pagination import PageRequest
from servicedesk.tickets.infrastructure.models import TicketModel


def to_entity(model: NotificationModel, ticket_title: Optional[str] = None) -> Notification:
    return Notification(
        id=model.id,
        user_id=model.user_id,
        ticket_id=model.ticket_id,
        type=model.type,
        title=model.title,
        message=model.message,
        is_read=model.is_read,
        created_at=model.created_at,
        ticket_title=ticket_title,
    )


class SQLAlchemyNotificationRepository(INotificationRepository):
    """SQLAlchemy implementation for notifications."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _with_ticket_title(self):
        return (
            select(NotificationModel, TicketModel.title)
            .outerjoin(TicketModel, NotificationModel.ticket_id == TicketModel.id)
        )

    async def create(self, user_id: int, ticket_id: Optional[int], type: str,
                     title: str, message: str) -> Notification:
        model = NotificationModel(
            user_id=user_id,
            ticket_id=ticket_id,
            type=type,
            title=title,
            message=message,
            is_read=False,
        )
        self._session.add(model)
        await self._session.flush()
        return to_entity(model)

    async def mark_read(self, notification_id: int, user_id: int) -> Optional[Notification]:
        stmt = self._with_ticket_title().where(
            NotificationModel.id == notification_id,
            NotificationModel.user_id == user_id,
        )
        row = (await self._session.execute(stmt)).first()
        if row is None:
            return None

        model, ticket_title = row
        if not model.is_read:
            model.is_read = True
            await self._session.flush()
        return to_entity(model, ticket_title)

    async def mark_all_read(self, user_id: int) -> int:
        stmt = (
            update(NotificationModel)
            .where(NotificationModel.user_id == user_id, NotificationModel.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def unread_count(self, user_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(NotificationModel)
            .where(NotificationModel.user_id == user_id, NotificationModel.is_read.is_(False))
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def delete(self, notification_id: int, user_id: int) -> bool:
        stmt = (
            delete(NotificationModel)
            .where(NotificationModel.id == notification_id, NotificationModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return (result.rowcount or 0) > 0

    async def list_for_user(self, user_id: int, page: PageRequest,
                            unread_only: bool = False) -> Tuple[List[Notification], int]:
        conditions = [NotificationModel.user_id == user_id]
        if unread_only:
            conditions.append(NotificationModel.is_read.is_(False))

        count_stmt = select(func.count()).select_from(NotificationModel).where(*conditions)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            self._with_ticket_title()
            .where(*conditions)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(page.limit)
            .offset(page.offset)
        )
        rows = (await self._session.execute(stmt)).all()
        return [to_entity(model, title) for model, title in rows], total

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
