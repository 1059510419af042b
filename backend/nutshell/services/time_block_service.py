"""
Time block scheduling service.

Places tasks on 15-minute aligned slots of a day. Each operation resolves the
caller and the task first, validates the range, checks it against the caller's
other blocks and then performs exactly one write. Operations of the same user
run one at a time so two requests cannot both pass the overlap check.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID

from nutshell.core.exceptions import (
    BusinessLogicError,
    ErrorCode,
    IllegalArgumentError,
    NotFoundError,
)
from nutshell.core.logger import setup_logger
from nutshell.interfaces.task_repository import ITaskRepository
from nutshell.interfaces.time_block_repository import ITimeBlockRepository
from nutshell.interfaces.user_repository import IUserRepository
from nutshell.models.time_block import TaskTimeBlocks, TimeBlock, TimeRange
from nutshell.services.overlap_detector import OverlapDetector
from nutshell.services.task_utils import resolve_owned_task, resolve_user
from nutshell.services.user_locks import UserLockRegistry, user_locks
from nutshell.utils.datetime_utils import day_bounds
from nutshell.utils.time_range import validate_time_range

logger = setup_logger(__name__)


class TimeBlockService:
    """Service for creating, moving and removing time blocks."""

    def __init__(
        self,
        user_repo: IUserRepository,
        task_repo: ITaskRepository,
        time_block_repo: ITimeBlockRepository,
        locks: Optional[UserLockRegistry] = None,
    ):
        self.user_repo = user_repo
        self.task_repo = task_repo
        self.time_block_repo = time_block_repo
        self.overlap_detector = OverlapDetector(time_block_repo)
        self.locks = locks or user_locks

    async def create(
        self, user_id: str, task_id: UUID, time_range: TimeRange
    ) -> TimeBlock:
        """
        Place a new time block for a task.

        Raises:
            NotFoundError: NOT_FOUND_USER / NOT_FOUND_TASK
            BusinessLogicError: TIME_CONFLICT, NOT_SAME_DATE_CONFLICT or TIME_INVALID
        """
        async with self.locks.get(user_id):
            task = await resolve_owned_task(self.user_repo, self.task_repo, user_id, task_id)
            validate_time_range(time_range.start_time, time_range.end_time)
            if await self.overlap_detector.conflicts_on_create(user_id, time_range):
                raise BusinessLogicError(ErrorCode.TIME_CONFLICT)

            time_block = await self.time_block_repo.create(
                task.id, time_range.start_time, time_range.end_time
            )

        logger.info(
            f"Time block {time_block.id} created for task {task.id}: "
            f"{time_block.start_time} - {time_block.end_time}"
        )
        return time_block

    async def update(
        self,
        user_id: str,
        task_id: UUID,
        time_block_id: UUID,
        time_range: TimeRange,
    ) -> TimeBlock:
        """
        Move or resize an existing time block.

        The block being moved is ignored by the overlap check.

        Raises:
            NotFoundError: NOT_FOUND_USER / NOT_FOUND_TASK / NOT_FOUND_TIME_BLOCK
            BusinessLogicError: TIME_CONFLICT, NOT_SAME_DATE_CONFLICT or TIME_INVALID
        """
        async with self.locks.get(user_id):
            task = await resolve_owned_task(self.user_repo, self.task_repo, user_id, task_id)
            validate_time_range(time_range.start_time, time_range.end_time)
            if await self.overlap_detector.conflicts_on_update(
                user_id, time_block_id, time_range
            ):
                raise BusinessLogicError(ErrorCode.TIME_CONFLICT)

            existing = await self.time_block_repo.get(task.id, time_block_id)
            if not existing:
                raise NotFoundError(ErrorCode.NOT_FOUND_TIME_BLOCK)

            time_block = await self.time_block_repo.update_time(
                task.id, existing.id, time_range.start_time, time_range.end_time
            )

        logger.info(
            f"Time block {time_block.id} moved to "
            f"{time_block.start_time} - {time_block.end_time}"
        )
        return time_block

    async def delete(self, user_id: str, task_id: UUID, time_block_id: UUID) -> None:
        """
        Remove a time block.

        Raises:
            NotFoundError: NOT_FOUND_USER / NOT_FOUND_TASK / NOT_FOUND_TIME_BLOCK
        """
        async with self.locks.get(user_id):
            task = await resolve_owned_task(self.user_repo, self.task_repo, user_id, task_id)
            existing = await self.time_block_repo.get(task.id, time_block_id)
            if not existing:
                raise NotFoundError(ErrorCode.NOT_FOUND_TIME_BLOCK)
            await self.time_block_repo.delete(task.id, existing.id)

        logger.info(f"Time block {time_block_id} deleted from task {task_id}")

    async def get_time_blocks(
        self, user_id: str, start_date: date, range_days: int = 1
    ) -> list[TaskTimeBlocks]:
        """
        List tasks with their time blocks over ``range_days`` days from ``start_date``.

        Raises:
            IllegalArgumentError: If range_days is smaller than 1
        """
        if range_days < 1:
            raise IllegalArgumentError(
                ErrorCode.INVALID_ARGUMENTS, "range must be at least 1 day"
            )

        user = await resolve_user(self.user_repo, user_id)
        start_time, end_time = day_bounds(start_date, range_days)

        tasks = await self.task_repo.list_with_time_blocks(user.id, start_time, end_time)
        result: list[TaskTimeBlocks] = []
        for task in tasks:
            blocks = await self.time_block_repo.list_in_range(task.id, start_time, end_time)
            result.append(
                TaskTimeBlocks(
                    id=task.id,
                    name=task.name,
                    status=task.status.label,
                    time_blocks=blocks,
                )
            )
        return result
