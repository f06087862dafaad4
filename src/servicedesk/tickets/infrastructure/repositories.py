"""
Tickets Infrastructure Repositories
===================================

SQLAlchemy implementation of the ticket repository.
"""

from typing import Dict, List, Optional, Tuple

from sqlalchemy import select, func, or_, and_, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from servicedesk.shared.api.pagination import PageRequest
from servicedesk.tickets.application import ITicketRepository
from servicedesk.tickets.domain import Comment, Ticket
from servicedesk.tickets.infrastructure.models import TicketModel, CommentModel
from servicedesk.users.infrastructure.models import UserModel

Reporter = aliased(UserModel, name="reporter")
Assignee = aliased(UserModel, name="assignee")

UNCATEGORIZED = "Uncategorized"


def _full_name(user: Optional[UserModel]) -> Optional[str]:
    if user is None:
        return None
    return f"{user.first_name} {user.last_name}".strip()


def to_entity(model: TicketModel, reporter: Optional[UserModel] = None,
              assignee: Optional[UserModel] = None) -> Ticket:
    return Ticket(
        id=model.id,
        title=model.title,
        description=model.description,
        reporter_id=model.reporter_id,
        status=model.status,
        priority=model.priority,
        category=model.category,
        assignee_id=model.assignee_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
        resolved_at=model.resolved_at,
        reporter_name=_full_name(reporter),
        reporter_email=reporter.email if reporter else None,
        assignee_name=_full_name(assignee),
    )


def comment_to_entity(model: CommentModel, author: Optional[UserModel] = None) -> Comment:
    return Comment(
        id=model.id,
        ticket_id=model.ticket_id,
        user_id=model.user_id,
        content=model.content,
        is_internal=model.is_internal,
        created_at=model.created_at,
        author_name=_full_name(author),
    )


class SQLAlchemyTicketRepository(ITicketRepository):
    """SQLAlchemy implementation for tickets and comments."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _with_people(self):
        return (
            select(TicketModel, Reporter, Assignee)
            .join(Reporter, TicketModel.reporter_id == Reporter.id)
            .outerjoin(Assignee, TicketModel.assignee_id == Assignee.id)
        )

    async def create(self, reporter_id: int, title: str, description: str,
                     priority: str, category: Optional[str]) -> Ticket:
        model = TicketModel(
            reporter_id=reporter_id,
            title=title,
            description=description,
            priority=priority,
            category=category,
        )
        self._session.add(model)
        await self._session.flush()
        return await self.get_by_id(model.id)

    async def get_by_id(self, ticket_id: int) -> Optional[Ticket]:
        stmt = self._with_people().where(TicketModel.id == ticket_id)
        row = (await self._session.execute(stmt)).first()
        return to_entity(*row) if row else None

    async def update(self, ticket_id: int, fields: dict) -> Optional[Ticket]:
        model = await self._session.get(TicketModel, ticket_id)
        if model is None:
            return None

        for key, value in fields.items():
            setattr(model, key, value)
        await self._session.flush()

        return await self.get_by_id(ticket_id)

    async def search(self, filters: dict, page: PageRequest) -> Tuple[List[Ticket], int]:
        conditions = []
        if filters.get("status"):
            conditions.append(TicketModel.status == filters["status"])
        if filters.get("priority"):
            conditions.append(TicketModel.priority == filters["priority"])
        if filters.get("category"):
            conditions.append(TicketModel.category == filters["category"])
        if filters.get("assignee") is not None:
            conditions.append(TicketModel.assignee_id == filters["assignee"])
        if filters.get("reporter") is not None:
            conditions.append(TicketModel.reporter_id == filters["reporter"])
        if filters.get("search"):
            pattern = f"%{filters['search'].lower()}%"
            conditions.append(or_(
                func.lower(TicketModel.title).like(pattern),
                func.lower(TicketModel.description).like(pattern),
            ))

        where = and_(*conditions) if conditions else true()

        count_stmt = select(func.count()).select_from(TicketModel).where(where)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            self._with_people()
            .where(where)
            .order_by(TicketModel.created_at.desc(), TicketModel.id.desc())
            .limit(page.limit)
            .offset(page.offset)
        )
        rows = (await self._session.execute(stmt)).all()
        return [to_entity(*row) for row in rows], total

    async def add_comment(self, ticket_id: int, user_id: int, content: str,
                          is_internal: bool) -> Comment:
        model = CommentModel(
            ticket_id=ticket_id,
            user_id=user_id,
            content=content,
            is_internal=is_internal,
        )
        self._session.add(model)
        await self._session.flush()

        author = await self._session.get(UserModel, user_id)
        return comment_to_entity(model, author)

    async def list_comments(self, ticket_id: int) -> List[Comment]:
        stmt = (
            select(CommentModel, UserModel)
            .join(UserModel, CommentModel.user_id == UserModel.id)
            .where(CommentModel.ticket_id == ticket_id)
            .order_by(CommentModel.created_at.asc(), CommentModel.id.asc())
        )
        rows = (await self._session.execute(stmt)).all()
        return [comment_to_entity(*row) for row in rows]

    async def count_by(self, column: str) -> Dict[str, int]:
        if column == "category":
            key = func.coalesce(TicketModel.category, UNCATEGORIZED)
        else:
            key = getattr(TicketModel, column)

        stmt = select(key, func.count(TicketModel.id)).group_by(key)
        rows = (await self._session.execute(stmt)).all()
        return {name: count for name, count in rows}

    async def commit(self) -> None:
        await self._session.commit()
