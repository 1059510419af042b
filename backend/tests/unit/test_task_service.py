"""
Unit tests for TaskService.
"""

import asyncio
from datetime import date, datetime, time, timedelta
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from nutshell.core.exceptions import ErrorCode, IllegalArgumentError, NotFoundError
from nutshell.infrastructure.local.database import TaskOrderORM
from nutshell.models.enums import TaskStatus
from nutshell.models.task import DeadLine, TaskCreate, TaskStatusChange, TaskUpdate
from nutshell.models.task_order import TaskOrderCreate
from nutshell.services.task_service import TaskService
from nutshell.services.user_locks import UserLockRegistry

DAY = date(2024, 6, 1)


@pytest.fixture
def service(user_repo, task_repo, time_block_repo, task_order_repo):
    return TaskService(
        user_repo, task_repo, time_block_repo, task_order_repo, locks=UserLockRegistry()
    )


@pytest.mark.asyncio
async def test_create_task_requires_registered_user(service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.create_task("ghost", TaskCreate(name="Task"))

    assert exc_info.value.code == ErrorCode.NOT_FOUND_USER


@pytest.mark.asyncio
async def test_created_task_lands_in_staging_area(service, registered_user):
    task = await service.create_task(registered_user.id, TaskCreate(name="Inbox item"))

    staging = await service.list_tasks(registered_user.id)

    assert task.assigned_date is None
    assert [s.id for s in staging] == [task.id]
    assert staging[0].status == "진행 전"


@pytest.mark.asyncio
async def test_status_complete_example(service, registered_user):
    task = await service.create_task(registered_user.id, TaskCreate(name="Finish"))

    updated = await service.update_status(
        registered_user.id, task.id, TaskStatusChange(status="완료", target_date=DAY)
    )

    assert updated.status == TaskStatus.DONE
    assert updated.end_date == DAY
    assert updated.assigned_date is None


@pytest.mark.asyncio
async def test_status_moves_task_between_views(service, registered_user):
    task = await service.create_task(registered_user.id, TaskCreate(name="Move me"))

    await service.update_status(
        registered_user.id, task.id, TaskStatusChange(status="진행 중", target_date=DAY)
    )
    on_day = await service.list_tasks(registered_user.id, target_date=DAY)
    staging = await service.list_tasks(registered_user.id)

    assert [s.id for s in on_day] == [task.id]
    assert on_day[0].status == "진행 중"
    assert staging == []

    back = await service.update_status(
        registered_user.id, task.id, TaskStatusChange(status="진행 중", target_date=None)
    )
    assert back.status == TaskStatus.TODO
    assert back.assigned_date is None


@pytest.mark.asyncio
async def test_status_for_unknown_task_is_not_found(service, registered_user):
    with pytest.raises(NotFoundError) as exc_info:
        await service.update_status(
            registered_user.id, uuid4(), TaskStatusChange(status="완료", target_date=DAY)
        )

    assert exc_info.value.code == ErrorCode.NOT_FOUND_TASK


@pytest.mark.asyncio
async def test_task_detail_includes_block_of_target_day(
    service, time_block_repo, registered_user
):
    task = await service.create_task(
        registered_user.id,
        TaskCreate(name="Detail", description="notes", deadline=DeadLine(date=DAY)),
    )
    block = await time_block_repo.create(
        task.id, datetime.combine(DAY, time(9, 0)), datetime.combine(DAY, time(10, 0))
    )

    with_block = await service.get_task_detail(registered_user.id, task.id, DAY)
    without_date = await service.get_task_detail(registered_user.id, task.id)
    other_day = await service.get_task_detail(
        registered_user.id, task.id, DAY + timedelta(days=1)
    )

    assert with_block.time_block.id == block.id
    assert with_block.description == "notes"
    assert with_block.deadline == DeadLine(date=DAY)
    assert without_date.time_block is None
    assert other_day.time_block is None


@pytest.mark.asyncio
async def test_update_and_remove_task(service, registered_user):
    task = await service.create_task(registered_user.id, TaskCreate(name="Old name"))

    updated = await service.update_task(registered_user.id, task.id, TaskUpdate(name="New name"))
    await service.remove_task(registered_user.id, task.id)

    assert updated.name == "New name"
    with pytest.raises(NotFoundError):
        await service.get_task_detail(registered_user.id, task.id)


@pytest.mark.asyncio
async def test_user_order_uses_saved_order(service, registered_user):
    first = await service.create_task(registered_user.id, TaskCreate(name="first"))
    second = await service.create_task(registered_user.id, TaskCreate(name="second"))
    third = await service.create_task(registered_user.id, TaskCreate(name="third"))

    fallback = await service.list_tasks(registered_user.id, order="user")
    await service.create_order(
        registered_user.id,
        TaskOrderCreate(is_target_day=False, task_ids=[first.id, third.id]),
    )
    custom = await service.list_tasks(registered_user.id, order="user")

    assert [s.id for s in fallback] == [third.id, second.id, first.id]
    assert [s.id for s in custom] == [first.id, third.id]


@pytest.mark.asyncio
async def test_list_rejects_unknown_order(service, registered_user):
    with pytest.raises(IllegalArgumentError):
        await service.list_tasks(registered_user.id, order="alphabetical")


@pytest.mark.asyncio
async def test_list_overdue(service, registered_user):
    task = await service.create_task(registered_user.id, TaskCreate(name="Late"))
    await service.update_status(
        registered_user.id,
        task.id,
        TaskStatusChange(status="진행 전", target_date=date(2000, 1, 3)),
    )

    overdue = await service.list_overdue(registered_user.id)

    assert [s.id for s in overdue] == [task.id]


@pytest.mark.asyncio
async def test_concurrent_staging_orders_leave_one_row(
    service, session_factory, registered_user
):
    first, second = uuid4(), uuid4()

    await asyncio.gather(
        service.create_order(
            registered_user.id, TaskOrderCreate(is_target_day=False, task_ids=[first])
        ),
        service.create_order(
            registered_user.id, TaskOrderCreate(is_target_day=False, task_ids=[second])
        ),
    )

    async with session_factory() as session:
        count = await session.scalar(select(func.count()).select_from(TaskOrderORM))
    assert count == 1


@pytest.mark.asyncio
async def test_today_tasks_panels(service, registered_user, monkeypatch):
    monkeypatch.setattr("nutshell.services.task_service.local_today", lambda tz: DAY)
    due = await service.create_task(
        registered_user.id,
        TaskCreate(name="Due soon", deadline=DeadLine(date=DAY + timedelta(days=2))),
    )
    await service.create_task(
        registered_user.id,
        TaskCreate(name="Due later", deadline=DeadLine(date=DAY + timedelta(days=30))),
    )
    working = await service.create_task(registered_user.id, TaskCreate(name="Working"))
    await service.update_status(
        registered_user.id, working.id, TaskStatusChange(status="진행 중", target_date=DAY)
    )

    upcoming = await service.get_today_tasks(registered_user.id, "upcoming")
    in_progress = await service.get_today_tasks(registered_user.id, "inprogress")

    assert upcoming.type == "upcoming"
    assert [s.id for s in upcoming.tasks] == [due.id]
    assert [s.id for s in in_progress.tasks] == [working.id]
    assert in_progress.tasks[0].status == "진행 중"

    with pytest.raises(IllegalArgumentError):
        await service.get_today_tasks(registered_user.id, "someday")


@pytest.mark.asyncio
async def test_dashboard_counts_week(service, registered_user, monkeypatch):
    monkeypatch.setattr("nutshell.services.task_service.local_today", lambda tz: DAY)
    planned = await service.create_task(registered_user.id, TaskCreate(name="Planned"))
    finished = await service.create_task(registered_user.id, TaskCreate(name="Finished"))
    await service.update_status(
        registered_user.id, planned.id, TaskStatusChange(status="진행 전", target_date=DAY)
    )
    await service.update_status(
        registered_user.id, finished.id, TaskStatusChange(status="진행 전", target_date=DAY)
    )
    await service.update_status(
        registered_user.id, finished.id, TaskStatusChange(status="완료", target_date=DAY)
    )

    dashboard = await service.get_dashboard(registered_user.id)

    # DAY is a Saturday; the default week runs Monday to Sunday
    assert dashboard.start_date == date(2024, 5, 27)
    assert dashboard.end_date == date(2024, 6, 2)
    day = next(d for d in dashboard.days if d.date == DAY)
    assert (day.assigned, day.completed) == (2, 1)
    assert dashboard.completion_rate == 0.5

    with pytest.raises(IllegalArgumentError):
        await service.get_dashboard(registered_user.id, date(2024, 6, 2), date(2024, 6, 1))


@pytest.mark.asyncio
async def test_user_order_drops_tasks_moved_out_of_view(service, registered_user):
    stays = await service.create_task(registered_user.id, TaskCreate(name="stays"))
    moves = await service.create_task(registered_user.id, TaskCreate(name="moves"))
    await service.create_order(
        registered_user.id,
        TaskOrderCreate(is_target_day=False, task_ids=[moves.id, stays.id]),
    )
    await service.update_status(
        registered_user.id, moves.id, TaskStatusChange(status="진행 전", target_date=DAY)
    )
    unlisted = await service.create_task(registered_user.id, TaskCreate(name="unlisted"))

    custom = await service.list_tasks(registered_user.id, order="user")

    assert [s.id for s in custom] == [stays.id]
    assert unlisted.id not in {s.id for s in custom}


@pytest.mark.asyncio
async def test_update_task_keeps_omitted_fields_and_clears_nulls(service, registered_user):
    task = await service.create_task(
        registered_user.id,
        TaskCreate(name="Keep", description="notes", deadline=DeadLine(date=DAY)),
    )

    updated = await service.update_task(
        registered_user.id, task.id, TaskUpdate(description=None)
    )

    assert updated.name == "Keep"
    assert updated.description is None
    assert updated.deadline == DeadLine(date=DAY)
