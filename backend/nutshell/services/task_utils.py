"""
Task utility functions.

Resolution helpers shared by the scheduling services: every operation first
resolves the caller and then the task it owns.
"""

from uuid import UUID

from nutshell.core.exceptions import ErrorCode, NotFoundError
from nutshell.interfaces.task_repository import ITaskRepository
from nutshell.interfaces.user_repository import IUserRepository
from nutshell.models.task import Task
from nutshell.models.user import UserAccount


async def resolve_user(user_repo: IUserRepository, user_id: str) -> UserAccount:
    """Get the caller's account or raise NOT_FOUND_USER."""
    user = await user_repo.get(user_id)
    if not user:
        raise NotFoundError(ErrorCode.NOT_FOUND_USER, f"User {user_id} not found")
    return user


async def resolve_owned_task(
    user_repo: IUserRepository,
    task_repo: ITaskRepository,
    user_id: str,
    task_id: UUID,
) -> Task:
    """
    Resolve the caller, then a task owned by the caller.

    Raises:
        NotFoundError: NOT_FOUND_USER, or NOT_FOUND_TASK when the task is
            missing or belongs to someone else
    """
    user = await resolve_user(user_repo, user_id)
    task = await task_repo.get(user.id, task_id)
    if not task:
        raise NotFoundError(ErrorCode.NOT_FOUND_TASK, f"Task {task_id} not found")
    return task
