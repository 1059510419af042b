"""
Tasks API endpoints.

Task CRUD, status transitions, list views, dashboards, custom orders and the time blocks
of a task.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from nutshell.api.deps import CurrentUser, TaskServiceDep, TimeBlockServiceDep
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
from nutshell.models.time_block import TimeBlock, TimeBlockRequest

router = APIRouter()


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    task: TaskCreate,
    user: CurrentUser,
    service: TaskServiceDep,
):
    """Create a new task in the staging area."""
    return await service.create_task(user.id, task)


@router.get("", response_model=list[TaskSummary])
async def list_tasks(
    user: CurrentUser,
    service: TaskServiceDep,
    order: Optional[str] = Query(
        None, description="recent | old | near | far | user (default: recent)"
    ),
    target_date: Optional[date] = Query(
        None, description="Day view (omit for the staging area)"
    ),
):
    """List the tasks of the staging area or of one day."""
    return await service.list_tasks(user.id, order=order, target_date=target_date)


@router.get("/overdue", response_model=list[TaskSummary])
async def list_overdue_tasks(
    user: CurrentUser,
    service: TaskServiceDep,
):
    """List TODO tasks left on a day before today."""
    return await service.list_overdue(user.id)


@router.get("/today", response_model=TodayTasks)
async def get_today_tasks(
    user: CurrentUser,
    service: TaskServiceDep,
    type: str = Query(..., description="upcoming | inprogress"),
):
    """List upcoming deadlines or tasks in progress for today."""
    return await service.get_today_tasks(user.id, type)


@router.get("/period", response_model=TaskDashboard)
async def get_task_dashboard(
    user: CurrentUser,
    service: TaskServiceDep,
    start_date: Optional[date] = Query(
        None, description="First day (default: this week's Monday or the 1st)"
    ),
    end_date: Optional[date] = Query(
        None, description="Last day (default: one week or the end of the month)"
    ),
    is_month: bool = Query(False, description="Use a month instead of a week"),
):
    """Count planned and completed tasks per day over a week or a month."""
    return await service.get_dashboard(user.id, start_date, end_date, is_month)


@router.post("/orders", response_model=TaskOrder, status_code=status.HTTP_201_CREATED)
async def save_task_order(
    order: TaskOrderCreate,
    user: CurrentUser,
    service: TaskServiceDep,
):
    """Save the custom order of one view."""
    return await service.create_order(user.id, order)


@router.get("/{task_id}", response_model=TaskDetail)
async def get_task(
    task_id: UUID,
    user: CurrentUser,
    service: TaskServiceDep,
    target_date: Optional[date] = Query(
        None, description="Include the task's time block on this day"
    ),
):
    """Get a task by ID."""
    return await service.get_task_detail(user.id, task_id, target_date)


@router.patch("/{task_id}", response_model=Task)
async def update_task(
    task_id: UUID,
    update: TaskUpdate,
    user: CurrentUser,
    service: TaskServiceDep,
):
    """Edit name, description or deadline."""
    return await service.update_task(user.id, task_id, update)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: UUID,
    user: CurrentUser,
    service: TaskServiceDep,
):
    """Delete a task and its time blocks."""
    await service.remove_task(user.id, task_id)


@router.patch("/{task_id}/status", response_model=Task)
async def change_task_status(
    task_id: UUID,
    change: TaskStatusChange,
    user: CurrentUser,
    service: TaskServiceDep,
):
    """Move a task to the staging area, onto a day, or to completion."""
    return await service.update_status(user.id, task_id, change)


# ===========================================
# Time blocks of a task
# ===========================================


@router.post(
    "/{task_id}/time-blocks",
    response_model=TimeBlock,
    status_code=status.HTTP_201_CREATED,
)
async def create_time_block(
    task_id: UUID,
    request: TimeBlockRequest,
    user: CurrentUser,
    service: TimeBlockServiceDep,
):
    """Place a time block for a task."""
    return await service.create(user.id, task_id, request)


@router.patch("/{task_id}/time-blocks/{time_block_id}", response_model=TimeBlock)
async def update_time_block(
    task_id: UUID,
    time_block_id: UUID,
    request: TimeBlockRequest,
    user: CurrentUser,
    service: TimeBlockServiceDep,
):
    """Move or resize a time block."""
    return await service.update(user.id, task_id, time_block_id, request)


@router.delete(
    "/{task_id}/time-blocks/{time_block_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_time_block(
    task_id: UUID,
    time_block_id: UUID,
    user: CurrentUser,
    service: TimeBlockServiceDep,
):
    """Remove a time block."""
    await service.delete(user.id, task_id, time_block_id)
