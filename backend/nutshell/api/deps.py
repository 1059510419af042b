"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from nutshell.core.config import get_settings
from nutshell.core.exceptions import AuthenticationError, ErrorCode
from nutshell.interfaces.auth_provider import IAuthProvider, User
from nutshell.interfaces.task_order_repository import ITaskOrderRepository
from nutshell.interfaces.task_repository import ITaskRepository
from nutshell.interfaces.time_block_repository import ITimeBlockRepository
from nutshell.interfaces.user_repository import IUserRepository
from nutshell.services.task_service import TaskService
from nutshell.services.time_block_service import TimeBlockService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_user_repository() -> IUserRepository:
    """Get user repository instance."""
    from nutshell.infrastructure.local.user_repository import SqliteUserRepository
    return SqliteUserRepository()


@lru_cache()
def get_task_repository() -> ITaskRepository:
    """Get task repository instance."""
    from nutshell.infrastructure.local.task_repository import SqliteTaskRepository
    return SqliteTaskRepository()


@lru_cache()
def get_time_block_repository() -> ITimeBlockRepository:
    """Get time block repository instance."""
    from nutshell.infrastructure.local.time_block_repository import (
        SqliteTimeBlockRepository,
    )
    return SqliteTimeBlockRepository()


@lru_cache()
def get_task_order_repository() -> ITaskOrderRepository:
    """Get task order repository instance."""
    from nutshell.infrastructure.local.task_order_repository import (
        SqliteTaskOrderRepository,
    )
    return SqliteTaskOrderRepository()


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    from nutshell.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=settings.AUTH_REQUIRED)


UserRepo = Annotated[IUserRepository, Depends(get_user_repository)]
TaskRepo = Annotated[ITaskRepository, Depends(get_task_repository)]
TimeBlockRepo = Annotated[ITimeBlockRepository, Depends(get_time_block_repository)]
TaskOrderRepo = Annotated[ITaskOrderRepository, Depends(get_task_order_repository)]


# ===========================================
# Service Dependencies
# ===========================================


def get_task_service(
    user_repo: UserRepo,
    task_repo: TaskRepo,
    time_block_repo: TimeBlockRepo,
    task_order_repo: TaskOrderRepo,
) -> TaskService:
    """Get TaskService instance."""
    return TaskService(user_repo, task_repo, time_block_repo, task_order_repo)


def get_time_block_service(
    user_repo: UserRepo,
    task_repo: TaskRepo,
    time_block_repo: TimeBlockRepo,
) -> TimeBlockService:
    """Get TimeBlockService instance."""
    return TimeBlockService(user_repo, task_repo, time_block_repo)


# ===========================================
# User Authentication
# ===========================================


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    A bearer token, when sent, always identifies the caller. Without one the
    configured default user is used unless authentication is required.
    """
    if not authorization:
        if auth_provider.is_enabled():
            raise AuthenticationError(
                ErrorCode.UNAUTHORIZED, "Authorization header required"
            )
        return User(id=get_settings().DEFAULT_USER_ID)

    # Extract token from "Bearer <token>"
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError(
            ErrorCode.UNAUTHORIZED, "Invalid authorization header format"
        )

    return await auth_provider.verify_token(token)


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

CurrentUser = Annotated[User, Depends(get_current_user)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
TimeBlockServiceDep = Annotated[TimeBlockService, Depends(get_time_block_service)]
