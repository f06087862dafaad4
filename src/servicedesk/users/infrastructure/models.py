"""
Users Infrastructure Models
===========================

SQLAlchemy ORM models for the users module.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, DateTime, Integer, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from servicedesk.infrastructure.database import Base
from servicedesk.config import Role


class UserModel(Base):
    """
    Database model for the User entity.

    Maps to the 'users' table.
    """
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'agent', 'admin')", name="ck_users_role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(50), nullable=False, default=Role.USER, index=True)
    department: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )
