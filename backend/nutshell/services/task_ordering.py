"""
Task list ordering.

Resolves the display order of one view (the staging area or a single day)
for the supported order keys.
"""

from datetime import date, datetime
from typing import Optional

from nutshell.core.exceptions import ErrorCode, IllegalArgumentError
from nutshell.core.logger import setup_logger
from nutshell.interfaces.task_order_repository import ITaskOrderRepository
from nutshell.interfaces.task_repository import ITaskRepository
from nutshell.models.enums import TaskOrderKey
from nutshell.models.task import Task, TaskScopeQuery

logger = setup_logger(__name__)


def parse_order_key(order: Optional[str]) -> TaskOrderKey:
    """
    Parse an order key; None means "recent".

    Raises:
        IllegalArgumentError: If the key is not supported
    """
    if order is None:
        return TaskOrderKey.RECENT
    try:
        return TaskOrderKey(order)
    except ValueError as e:
        raise IllegalArgumentError(
            ErrorCode.INVALID_ARGUMENTS, f"Unsupported order: {order}"
        ) from e


def sort_by_deadline_distance(
    tasks: list[Task], now: datetime, descending: bool = False
) -> list[Task]:
    """
    Sort tasks by absolute distance between their deadline and ``now``.

    Tasks without a deadline go last in both directions. The sort is stable,
    so equal distances keep the incoming order.
    """
    with_deadline = [t for t in tasks if t.deadline is not None]
    without_deadline = [t for t in tasks if t.deadline is None]
    with_deadline.sort(
        key=lambda t: abs(t.deadline.as_datetime() - now),
        reverse=descending,
    )
    return with_deadline + without_deadline


def apply_stored_order(tasks: list[Task], task_ids: list) -> list[Task]:
    """
    Reorder tasks to follow a stored id sequence.

    Only tasks named in the sequence are returned. Stored ids outside
    ``tasks`` are skipped.
    """
    by_id = {task.id: task for task in tasks}
    return [by_id[task_id] for task_id in task_ids if task_id in by_id]


class TaskOrderingService:
    """Resolves the ordered task list of a view."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        task_order_repo: ITaskOrderRepository,
    ):
        self.task_repo = task_repo
        self.task_order_repo = task_order_repo

    async def resolve(
        self,
        user_id: str,
        order: Optional[str],
        target_date: Optional[date],
        now: datetime,
    ) -> list[Task]:
        """
        List the tasks of a view in the requested order.

        Args:
            user_id: Owner user ID
            order: recent | old | near | far | user (None = recent)
            target_date: Day view, or None for the staging area
            now: Reference time for near/far (naive, configured locale)

        Raises:
            IllegalArgumentError: If the order key is not supported
        """
        key = parse_order_key(order)

        if key == TaskOrderKey.OLD:
            return await self.task_repo.list_by_scope(
                TaskScopeQuery(user_id=user_id, target_date=target_date, newest_first=False)
            )

        if key == TaskOrderKey.USER:
            stored = await self.task_order_repo.get(
                user_id, target_date is not None, target_date
            )
            if stored is not None:
                # Only the stored tasks still in this view, in stored order
                listed = await self.task_repo.list_by_scope(
                    TaskScopeQuery(
                        user_id=user_id,
                        target_date=target_date,
                        task_ids=stored.task_ids,
                    )
                )
                return apply_stored_order(listed, stored.task_ids)
            logger.debug(f"No custom order for {user_id} on {target_date}, using recent")

        recent = await self.task_repo.list_by_scope(
            TaskScopeQuery(user_id=user_id, target_date=target_date)
        )
        if key == TaskOrderKey.NEAR:
            return sort_by_deadline_distance(recent, now)
        if key == TaskOrderKey.FAR:
            return sort_by_deadline_distance(recent, now, descending=True)
        return recent
