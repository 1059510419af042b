"""
Task service.

Task CRUD, status transitions, list views, custom orders and the
today/period dashboards.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from nutshell.core.config import get_settings
from nutshell.core.exceptions import ErrorCode, NotFoundError
from nutshell.core.logger import setup_logger
from nutshell.interfaces.task_order_repository import ITaskOrderRepository
from nutshell.interfaces.task_repository import ITaskRepository
from nutshell.interfaces.time_block_repository import ITimeBlockRepository
from nutshell.interfaces.user_repository import IUserRepository
from nutshell.models.enums import TodayTaskType
from nutshell.models.task import (
    Task,
    TaskCreate,
    TaskDashboard,
    TaskDetail,
    TaskStatusChange,
    TaskSummary,
    TaskUpdate,
    TodayTasks,
)
from nutshell.models.task_order import TaskOrder, TaskOrderCreate
from nutshell.services.status_transition import apply_status_change
from nutshell.services.task_dashboard import (
    build_dashboard,
    parse_today_type,
    resolve_period,
    select_in_progress,
    select_upcoming,
)
from nutshell.services.task_ordering import TaskOrderingService
from nutshell.services.task_utils import resolve_owned_task, resolve_user
from nutshell.services.user_locks import UserLockRegistry, user_locks
from nutshell.utils.datetime_utils import local_now, local_today

logger = setup_logger(__name__)


class TaskService:
    """Service for the task lifecycle and task list views."""

    def __init__(
        self,
        user_repo: IUserRepository,
        task_repo: ITaskRepository,
        time_block_repo: ITimeBlockRepository,
        task_order_repo: ITaskOrderRepository,
        locks: Optional[UserLockRegistry] = None,
    ):
        self.user_repo = user_repo
        self.task_repo = task_repo
        self.time_block_repo = time_block_repo
        self.task_order_repo = task_order_repo
        self.ordering = TaskOrderingService(task_repo, task_order_repo)
        self.locks = locks or user_locks

    async def create_task(self, user_id: str, data: TaskCreate) -> Task:
        """Create a task in the caller's staging area."""
        user = await resolve_user(self.user_repo, user_id)
        task = await self.task_repo.create(user.id, data)
        logger.info(f"Task {task.id} created for {user.id}")
        return task

    async def get_task_detail(
        self, user_id: str, task_id: UUID, target_date: Optional[date] = None
    ) -> TaskDetail:
        """
        Get a task with its time block on ``target_date``.

        Without a target date the detail carries no time block.
        """
        task = await resolve_owned_task(self.user_repo, self.task_repo, user_id, task_id)
        time_block = None
        if target_date is not None:
            time_block = await self.time_block_repo.find_for_day(task.id, target_date)
        return TaskDetail(
            name=task.name,
            description=task.description,
            status=task.status.label,
            deadline=task.deadline,
            time_block=time_block,
        )

    async def update_task(self, user_id: str, task_id: UUID, data: TaskUpdate) -> Task:
        """
        Edit name, description or deadline.

        Fields left out of the request are kept; description and deadline
        sent as null are cleared.
        """
        task = await resolve_owned_task(self.user_repo, self.task_repo, user_id, task_id)
        return await self.task_repo.update(task.user_id, task.id, data)

    async def remove_task(self, user_id: str, task_id: UUID) -> None:
        """Delete a task together with its time blocks."""
        async with self.locks.get(user_id):
            task = await resolve_owned_task(self.user_repo, self.task_repo, user_id, task_id)
            deleted = await self.task_repo.delete(task.user_id, task.id)
        if not deleted:
            raise NotFoundError(ErrorCode.NOT_FOUND_TASK, f"Task {task_id} not found")
        logger.info(f"Task {task_id} deleted")

    async def update_status(
        self, user_id: str, task_id: UUID, change: TaskStatusChange
    ) -> Task:
        """
        Move a task between the staging area, a day and completion.

        Raises:
            NotFoundError: NOT_FOUND_USER / NOT_FOUND_TASK
            IllegalArgumentError: Unknown status label with a target date
        """
        async with self.locks.get(user_id):
            task = await resolve_owned_task(self.user_repo, self.task_repo, user_id, task_id)
            before = task.schedule_state
            after = apply_status_change(before, change.status, change.target_date)
            updated = await self.task_repo.save_schedule_state(task.user_id, task.id, after)

        logger.info(
            f"Task {task.id} status {before.status.value}/{before.phase.value} "
            f"-> {after.status.value}/{after.phase.value}"
        )
        return updated

    async def list_tasks(
        self,
        user_id: str,
        order: Optional[str] = None,
        target_date: Optional[date] = None,
    ) -> list[TaskSummary]:
        """
        List one view: the staging area (no target date) or a single day.

        Raises:
            IllegalArgumentError: If the order key is not supported
        """
        user = await resolve_user(self.user_repo, user_id)
        now = local_now(get_settings().TIMEZONE)
        tasks = await self.ordering.resolve(user.id, order, target_date, now)
        return [TaskSummary.from_task(task) for task in tasks]

    async def create_order(self, user_id: str, data: TaskOrderCreate) -> TaskOrder:
        """Save the caller's custom order for one view, replacing any previous one."""
        async with self.locks.get(user_id):
            user = await resolve_user(self.user_repo, user_id)
            order = await self.task_order_repo.upsert(user.id, data)
        logger.info(
            f"Custom order saved for {user.id} "
            f"(target_date={order.target_date}, {len(order.task_ids)} tasks)"
        )
        return order

    async def list_overdue(self, user_id: str) -> list[TaskSummary]:
        """List TODO tasks left on a day before today."""
        user = await resolve_user(self.user_repo, user_id)
        today = local_today(get_settings().TIMEZONE)
        tasks = await self.task_repo.list_overdue(user.id, today)
        return [TaskSummary.from_task(task) for task in tasks]

    async def get_today_tasks(self, user_id: str, today_type: str) -> TodayTasks:
        """
        List one panel of the today view.

        upcoming: open tasks due within the next UPCOMING_DAYS days, soonest first.
        inprogress: open IN_PROGRESS tasks planned on today or earlier.

        Raises:
            IllegalArgumentError: If the panel type is not supported
        """
        kind = parse_today_type(today_type)
        user = await resolve_user(self.user_repo, user_id)
        settings = get_settings()
        today = local_today(settings.TIMEZONE)

        tasks = await self.task_repo.list_open(user.id)
        if kind == TodayTaskType.UPCOMING:
            selected = select_upcoming(tasks, today, settings.UPCOMING_DAYS)
        else:
            selected = select_in_progress(tasks, today)
        return TodayTasks(
            type=kind.value, tasks=[TaskSummary.from_task(task) for task in selected]
        )

    async def get_dashboard(
        self,
        user_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        is_month: bool = False,
    ) -> TaskDashboard:
        """
        Count planned and completed tasks per day over a week or a month.

        Raises:
            IllegalArgumentError: If start_date is after end_date
        """
        user = await resolve_user(self.user_repo, user_id)
        today = local_today(get_settings().TIMEZONE)
        start, end = resolve_period(today, start_date, end_date, is_month)
        tasks = await self.task_repo.list_in_period(user.id, start, end)
        return build_dashboard(tasks, start, end)
