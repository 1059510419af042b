"""
Time block repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from nutshell.models.time_block import TimeBlock


class ITimeBlockRepository(ABC):
    """Abstract interface for time block persistence."""

    @abstractmethod
    async def get(self, task_id: UUID, time_block_id: UUID) -> Optional[TimeBlock]:
        """Get a time block belonging to ``task_id``."""
        pass

    @abstractmethod
    async def find_for_day(self, task_id: UUID, target_date: date) -> Optional[TimeBlock]:
        """Get the task's first time block on ``target_date``, if any."""
        pass

    @abstractmethod
    async def exists_overlap(
        self,
        user_id: str,
        start_time: datetime,
        end_time: datetime,
        exclude_id: Optional[UUID] = None,
    ) -> bool:
        """
        Check whether any of the user's time blocks lies inside a range.

        A stored block matches when its start and its end are both between
        ``start_time`` and ``end_time`` (inclusive).

        Args:
            user_id: Owner of the tasks the blocks belong to
            start_time: Candidate range start
            end_time: Candidate range end
            exclude_id: Block to ignore (the one being moved)
        """
        pass

    @abstractmethod
    async def list_in_range(
        self, task_id: UUID, start_time: datetime, end_time: datetime
    ) -> list[TimeBlock]:
        """List a task's blocks lying inside [start_time, end_time], by start time."""
        pass

    @abstractmethod
    async def create(
        self, task_id: UUID, start_time: datetime, end_time: datetime
    ) -> TimeBlock:
        """Create a time block for a task."""
        pass

    @abstractmethod
    async def update_time(
        self,
        task_id: UUID,
        time_block_id: UUID,
        start_time: datetime,
        end_time: datetime,
    ) -> TimeBlock:
        """
        Move or resize a time block.

        Raises:
            NotFoundError: If the block does not belong to the task
        """
        pass

    @abstractmethod
    async def delete(self, task_id: UUID, time_block_id: UUID) -> bool:
        """Delete a time block. Returns False if not found."""
        pass
