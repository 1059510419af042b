"""
Task order repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from nutshell.models.task_order import TaskOrder, TaskOrderCreate


class ITaskOrderRepository(ABC):
    """Abstract interface for custom task order persistence."""

    @abstractmethod
    async def get(
        self, user_id: str, is_target_day: bool, target_date: Optional[date]
    ) -> Optional[TaskOrder]:
        """Get the stored order for one view."""
        pass

    @abstractmethod
    async def upsert(self, user_id: str, order: TaskOrderCreate) -> TaskOrder:
        """Save an order, replacing any existing one for the same view."""
        pass
