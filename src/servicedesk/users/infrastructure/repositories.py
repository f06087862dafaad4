"""
Users Infrastructure Repositories
=================================

SQLAlchemy implementation of the user repository.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import select, func, or_, and_, true
from sqlalchemy.ext.asyncio import AsyncSession

from servicedesk.shared.api.pagination import PageRequest
from servicedesk.users.application import IUserRepository
from servicedesk.users.domain import User
from servicedesk.users.infrastructure.models import UserModel


def to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        first_name=model.first_name,
        last_name=model.last_name,
        role=model.role,
        department=model.department,
        created_at=model.created_at,
    )


class SQLAlchemyUserRepository(IUserRepository):
    """SQLAlchemy implementation for users."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by id."""
        model = await self._session.get(UserModel, user_id)
        return to_entity(model) if model else None

    async def list_by_roles(self, roles: Sequence[str]) -> List[User]:
        """All users holding one of the roles, ordered by name."""
        stmt = (
            select(UserModel)
            .where(UserModel.role.in_(list(roles)))
            .order_by(UserModel.first_name, UserModel.last_name, UserModel.id)
        )
        result = await self._session.execute(stmt)
        return [to_entity(m) for m in result.scalars().all()]

    async def first_by_role(self, role: str) -> Optional[User]:
        """Lowest-id user holding the role."""
        stmt = select(UserModel).where(UserModel.role == role).order_by(UserModel.id).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return to_entity(model) if model else None

    async def search(self, filters: dict, page: PageRequest) -> Tuple[List[User], int]:
        """Filtered page of users (newest first) and the total match count."""
        conditions = []
        if filters.get("role"):
            conditions.append(UserModel.role == filters["role"])
        if filters.get("department"):
            conditions.append(UserModel.department == filters["department"])
        if filters.get("search"):
            pattern = f"%{filters['search'].lower()}%"
            conditions.append(or_(
                func.lower(UserModel.first_name).like(pattern),
                func.lower(UserModel.last_name).like(pattern),
                func.lower(UserModel.email).like(pattern),
            ))

        where = and_(*conditions) if conditions else true()

        count_stmt = select(func.count()).select_from(UserModel).where(where)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(UserModel)
            .where(where)
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .limit(page.limit)
            .offset(page.offset)
        )
        result = await self._session.execute(stmt)
        return [to_entity(m) for m in result.scalars().all()], total

    async def update_role(self, user_id: int, role: str) -> Optional[User]:
        """Set a user's role."""
        model = await self._session.get(UserModel, user_id)
        if model is None:
            return None

        model.role = role
        model.updated_at = datetime.now(timezone.utc)
        await self._session.flush()

        return to_entity(model)

    async def add(self, email: str, first_name: str, last_name: str,
                  role: str, department: Optional[str] = None) -> User:
        """Insert a user (seeding and tests; registration lives outside this service)."""
        model = UserModel(
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            department=department,
        )
        self._session.add(model)
        await self._session.flush()
        return to_entity(model)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return to_entity(model) if model else None
