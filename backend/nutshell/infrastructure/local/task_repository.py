"""
SQLite implementation of Task repository.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, exists, or_, select

from nutshell.core.exceptions import ErrorCode, NotFoundError
from nutshell.infrastructure.local.database import TaskORM, TimeBlockORM, get_session_factory
from nutshell.interfaces.task_repository import ITaskRepository
from nutshell.models.enums import TaskStatus
from nutshell.models.task import (
    DeadLine,
    ScheduleState,
    Task,
    TaskCreate,
    TaskScopeQuery,
    TaskUpdate,
)
from nutshell.utils.datetime_utils import now_utc


class SqliteTaskRepository(ITaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TaskORM) -> Task:
        """Convert ORM object to Pydantic model."""
        deadline = None
        if orm.deadline_date:
            deadline = DeadLine(date=orm.deadline_date, time=orm.deadline_time)
        return Task(
            id=UUID(orm.id),
            user_id=orm.user_id,
            name=orm.name,
            description=orm.description,
            status=TaskStatus(orm.status),
            deadline=deadline,
            assigned_date=orm.assigned_date,
            end_date=orm.end_date,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def _get_orm(self, session, user_id: str, task_id: UUID) -> Optional[TaskORM]:
        result = await session.execute(
            select(TaskORM).where(
                and_(TaskORM.id == str(task_id), TaskORM.user_id == user_id)
            )
        )
        return result.scalar_one_or_none()

    async def create(self, user_id: str, task: TaskCreate) -> Task:
        """Create a new task."""
        async with self._session_factory() as session:
            now = now_utc()
            orm = TaskORM(
                id=str(uuid4()),
                user_id=user_id,
                name=task.name,
                description=task.description,
                status=TaskStatus.TODO.value,
                deadline_date=task.deadline.date if task.deadline else None,
                deadline_time=task.deadline.time if task.deadline else None,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, user_id: str, task_id: UUID) -> Optional[Task]:
        """Get a task by ID."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, task_id)
            return self._orm_to_model(orm) if orm else None

    async def update(self, user_id: str, task_id: UUID, update: TaskUpdate) -> Task:
        """Update task details."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, task_id)
            if not orm:
                raise NotFoundError(ErrorCode.NOT_FOUND_TASK, f"Task {task_id} not found")

            fields = update.model_fields_set
            if "name" in fields and update.name is not None:
                orm.name = update.name
            if "description" in fields:
                orm.description = update.description
            if "deadline" in fields:
                orm.deadline_date = update.deadline.date if update.deadline else None
                orm.deadline_time = update.deadline.time if update.deadline else None

            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def save_schedule_state(
        self, user_id: str, task_id: UUID, state: ScheduleState
    ) -> Task:
        """Write status, assigned_date and end_date together."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, task_id)
            if not orm:
                raise NotFoundError(ErrorCode.NOT_FOUND_TASK, f"Task {task_id} not found")

            orm.status = state.status.value
            orm.assigned_date = state.assigned_date
            orm.end_date = state.end_date
            orm.updated_at = now_utc()

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, user_id: str, task_id: UUID) -> bool:
        """Delete a task together with its time blocks."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, user_id, task_id)
            if not orm:
                return False

            await session.execute(
                delete(TimeBlockORM).where(TimeBlockORM.task_id == orm.id)
            )
            await session.delete(orm)
            await session.commit()
            return True

    async def list_by_scope(self, query: TaskScopeQuery) -> list[Task]:
        """List the tasks of the staging area or of one day."""
        async with self._session_factory() as session:
            stmt = select(TaskORM).where(TaskORM.user_id == query.user_id)

            if query.target_date is None:
                stmt = stmt.where(TaskORM.assigned_date.is_(None))
            else:
                stmt = stmt.where(TaskORM.assigned_date == query.target_date)

            if query.task_ids is not None:
                stmt = stmt.where(TaskORM.id.in_([str(task_id) for task_id in query.task_ids]))

            if query.newest_first:
                stmt = stmt.order_by(TaskORM.created_at.desc())
            else:
                stmt = stmt.order_by(TaskORM.created_at.asc())

            result = await session.execute(stmt)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_with_time_blocks(
        self, user_id: str, start_time: datetime, end_time: datetime
    ) -> list[Task]:
        """List tasks with at least one time block inside the window."""
        async with self._session_factory() as session:
            has_block = exists().where(
                and_(
                    TimeBlockORM.task_id == TaskORM.id,
                    TimeBlockORM.start_time.between(start_time, end_time),
                    TimeBlockORM.end_time.between(start_time, end_time),
                )
            )
            result = await session.execute(
                select(TaskORM)
                .where(and_(TaskORM.user_id == user_id, has_block))
                .order_by(TaskORM.created_at.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_overdue(self, user_id: str, today: date) -> list[Task]:
        """List TODO tasks left on a past day."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM)
                .where(
                    and_(
                        TaskORM.user_id == user_id,
                        TaskORM.status == TaskStatus.TODO.value,
                        TaskORM.assigned_date < today,
                    )
                )
                .order_by(TaskORM.assigned_date.asc(), TaskORM.created_at.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_open(self, user_id: str) -> list[Task]:
        """List tasks without a completion date."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM)
                .where(and_(TaskORM.user_id == user_id, TaskORM.end_date.is_(None)))
                .order_by(TaskORM.created_at.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_in_period(self, user_id: str, start: date, end: date) -> list[Task]:
        """List tasks planned or completed inside the period."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM)
                .where(
                    and_(
                        TaskORM.user_id == user_id,
                        or_(
                            TaskORM.assigned_date.between(start, end),
                            TaskORM.end_date.between(start, end),
                        ),
                    )
                )
                .order_by(TaskORM.created_at.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
