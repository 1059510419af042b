"""
SQLite implementation of task order repository.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, select

from nutshell.infrastructure.local.database import TaskOrderORM, get_session_factory
from nutshell.interfaces.task_order_repository import ITaskOrderRepository
from nutshell.models.task_order import TaskOrder, TaskOrderCreate
from nutshell.utils.datetime_utils import now_utc


class SqliteTaskOrderRepository(ITaskOrderRepository):
    """SQLite implementation of task order repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TaskOrderORM) -> TaskOrder:
        return TaskOrder(
            id=UUID(orm.id),
            user_id=orm.user_id,
            is_target_day=bool(orm.is_target_day),
            target_date=orm.target_date,
            task_ids=[UUID(task_id) for task_id in (orm.task_ids or [])],
            updated_at=orm.updated_at,
        )

    async def _get_orm(
        self, session, user_id: str, is_target_day: bool, target_date: Optional[date]
    ) -> Optional[TaskOrderORM]:
        if target_date is None:
            date_condition = TaskOrderORM.target_date.is_(None)
        else:
            date_condition = TaskOrderORM.target_date == target_date
        result = await session.execute(
            select(TaskOrderORM).where(
                and_(
                    TaskOrderORM.user_id == user_id,
                    TaskOrderORM.is_target_day == is_target_day,
                    date_condition,
                )
            )
        )
        return result.scalars().first()

    async def get(
        self, user_id: str, is_target_day: bool, target_date: Optional[date]
    ) -> Optional[TaskOrder]:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, is_target_day, target_date)
            return self._orm_to_model(orm) if orm else None

    async def upsert(self, user_id: str, order: TaskOrderCreate) -> TaskOrder:
        async with self._session_factory() as session:
            orm = await self._get_orm(
                session, user_id, order.is_target_day, order.target_date
            )
            now = now_utc()
            if not orm:
                orm = TaskOrderORM(
                    id=str(uuid4()),
                    user_id=user_id,
                    is_target_day=order.is_target_day,
                    target_date=order.target_date,
                    created_at=now,
                )
                session.add(orm)

            orm.task_ids = [str(task_id) for task_id in order.task_ids]
            orm.updated_at = now

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)
