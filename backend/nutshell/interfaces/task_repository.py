"""
Task repository interface.

Defines the contract for task persistence operations. Every method is keyed
by the owning user so one user can never read or change another's tasks.
Implementations: SQLite
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from nutshell.models.task import (
    ScheduleState,
    Task,
    TaskCreate,
    TaskScopeQuery,
    TaskUpdate,
)


class ITaskRepository(ABC):
    """Abstract interface for task persistence."""

    @abstractmethod
    async def create(self, user_id: str, task: TaskCreate) -> Task:
        """
        Create a new task in the staging area.

        Args:
            user_id: Owner user ID
            task: Task creation data

        Returns:
            Created task with generated ID and timestamps
        """
        pass

    @abstractmethod
    async def get(self, user_id: str, task_id: UUID) -> Optional[Task]:
        """
        Get a task by ID.

        Args:
            user_id: Owner user ID
            task_id: Task ID

        Returns:
            Task if found and owned by the user, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, user_id: str, task_id: UUID, update: TaskUpdate) -> Task:
        """
        Update task details (name, description, deadline).

        Raises:
            NotFoundError: If task not found
        """
        pass

    @abstractmethod
    async def save_schedule_state(
        self, user_id: str, task_id: UUID, state: ScheduleState
    ) -> Task:
        """
        Overwrite status, assigned_date and end_date in one write.

        Raises:
            NotFoundError: If task not found
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str, task_id: UUID) -> bool:
        """
        Delete a task and its time blocks.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def list_by_scope(self, query: TaskScopeQuery) -> list[Task]:
        """
        List the tasks of one view ordered by creation time.

        Args:
            query: Owner, view (staging area or day), direction and optional ID filter

        Returns:
            Tasks newest first when query.newest_first, oldest first otherwise
        """
        pass

    @abstractmethod
    async def list_with_time_blocks(
        self, user_id: str, start_time: datetime, end_time: datetime
    ) -> list[Task]:
        """
        List tasks owning at least one time block inside [start_time, end_time].

        A block counts when both of its endpoints fall inside the window.
        """
        pass

    @abstractmethod
    async def list_overdue(self, user_id: str, today: date) -> list[Task]:
        """List TODO tasks assigned to a day before ``today``."""
        pass

    @abstractmethod
    async def list_open(self, user_id: str) -> list[Task]:
        """List tasks that are not completed, oldest first."""
        pass

    @abstractmethod
    async def list_in_period(self, user_id: str, start: date, end: date) -> list[Task]:
        """
        List tasks planned on or completed on a day in [start, end].

        A task matches when its assigned_date or its end_date falls inside
        the period.
        """
        pass
