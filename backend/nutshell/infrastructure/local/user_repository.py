"""
SQLite implementation of user repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from nutshell.infrastructure.local.database import UserORM, get_session_factory
from nutshell.interfaces.user_repository import IUserRepository
from nutshell.models.user import UserAccount, UserProfileUpdate
from nutshell.utils.datetime_utils import now_utc


class SqliteUserRepository(IUserRepository):
    """SQLite implementation of user repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: UserORM) -> UserAccount:
        return UserAccount(
            id=orm.id,
            email=orm.email,
            given_name=orm.given_name,
            family_name=orm.family_name,
            image=orm.image,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def get(self, user_id: str) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.id == user_id)
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def upsert(self, user_id: str, profile: UserProfileUpdate) -> UserAccount:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.id == user_id)
            )
            orm = result.scalar_one_or_none()
            if not orm:
                orm = UserORM(id=user_id, created_at=now_utc())
                session.add(orm)

            for field, value in profile.model_dump(exclude_unset=True).items():
                setattr(orm, field, value)
            orm.updated_at = now_utc()

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)
