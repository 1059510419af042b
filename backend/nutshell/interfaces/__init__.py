"""Abstract interfaces for infrastructure abstraction."""

from nutshell.interfaces.auth_provider import IAuthProvider
from nutshell.interfaces.task_order_repository import ITaskOrderRepository
from nutshell.interfaces.task_repository import ITaskRepository
from nutshell.interfaces.time_block_repository import ITimeBlockRepository
from nutshell.interfaces.user_repository import IUserRepository

__all__ = [
    "IAuthProvider",
    "ITaskRepository",
    "ITaskOrderRepository",
    "ITimeBlockRepository",
    "IUserRepository",
]
