"""API routers."""

from nutshell.api import tasks, time_blocks, users

__all__ = [
    "tasks",
    "time_blocks",
    "users",
]
