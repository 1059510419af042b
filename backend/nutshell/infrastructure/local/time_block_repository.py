"""
SQLite implementation of time block repository.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, exists, select

from nutshell.core.exceptions import ErrorCode, NotFoundError
from nutshell.infrastructure.local.database import TaskORM, TimeBlockORM, get_session_factory
from nutshell.interfaces.time_block_repository import ITimeBlockRepository
from nutshell.models.time_block import TimeBlock
from nutshell.utils.datetime_utils import day_bounds, now_utc


class SqliteTimeBlockRepository(ITimeBlockRepository):
    """SQLite implementation of time block repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TimeBlockORM) -> TimeBlock:
        return TimeBlock(
            id=UUID(orm.id),
            task_id=UUID(orm.task_id),
            start_time=orm.start_time,
            end_time=orm.end_time,
        )

    async def _get_orm(self, session, task_id: UUID, time_block_id: UUID) -> Optional[TimeBlockORM]:
        result = await session.execute(
            select(TimeBlockORM).where(
                and_(
                    TimeBlockORM.id == str(time_block_id),
                    TimeBlockORM.task_id == str(task_id),
                )
            )
        )
        return result.scalar_one_or_none()

    async def get(self, task_id: UUID, time_block_id: UUID) -> Optional[TimeBlock]:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, task_id, time_block_id)
            return self._orm_to_model(orm) if orm else None

    async def find_for_day(self, task_id: UUID, target_date: date) -> Optional[TimeBlock]:
        start_of_day, end_of_day = day_bounds(target_date)
        async with self._session_factory() as session:
            result = await session.execute(
                select(TimeBlockORM)
                .where(
                    and_(
                        TimeBlockORM.task_id == str(task_id),
                        TimeBlockORM.start_time.between(start_of_day, end_of_day),
                    )
                )
                .order_by(TimeBlockORM.start_time.asc())
                .limit(1)
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def exists_overlap(
        self,
        user_id: str,
        start_time: datetime,
        end_time: datetime,
        exclude_id: Optional[UUID] = None,
    ) -> bool:
        conditions = [
            TaskORM.id == TimeBlockORM.task_id,
            TaskORM.user_id == user_id,
            TimeBlockORM.start_time.between(start_time, end_time),
            TimeBlockORM.end_time.between(start_time, end_time),
        ]
        if exclude_id is not None:
            conditions.append(TimeBlockORM.id != str(exclude_id))

        async with self._session_factory() as session:
            result = await session.execute(select(exists().where(and_(*conditions))))
            return bool(result.scalar())

    async def list_in_range(
        self, task_id: UUID, start_time: datetime, end_time: datetime
    ) -> list[TimeBlock]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(TimeBlockORM)
                .where(
                    and_(
                        TimeBlockORM.task_id == str(task_id),
                        TimeBlockORM.start_time.between(start_time, end_time),
                        TimeBlockORM.end_time.between(start_time, end_time),
                    )
                )
                .order_by(TimeBlockORM.start_time.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def create(
        self, task_id: UUID, start_time: datetime, end_time: datetime
    ) -> TimeBlock:
        async with self._session_factory() as session:
            now = now_utc()
            orm = TimeBlockORM(
                id=str(uuid4()),
                task_id=str(task_id),
                start_time=start_time,
                end_time=end_time,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def update_time(
        self,
        task_id: UUID,
        time_block_id: UUID,
        start_time: datetime,
        end_time: datetime,
    ) -> TimeBlock:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, task_id, time_block_id)
            if not orm:
                raise NotFoundError(
                    ErrorCode.NOT_FOUND_TIME_BLOCK,
                    f"Time block {time_block_id} not found",
                )

            orm.start_time = start_time
            orm.end_time = end_time
            orm.updated_at = now_utc()

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, task_id: UUID, time_block_id: UUID) -> bool:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, task_id, time_block_id)
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True
