"""
Time block overlap detection.

A candidate range conflicts with a stored block when the stored block's start
and end both fall inside the candidate range (inclusive). A stored block that
only partially overlaps the candidate does not count.
"""

from uuid import UUID

from nutshell.interfaces.time_block_repository import ITimeBlockRepository
from nutshell.models.time_block import TimeRange


class OverlapDetector:
    """Checks candidate ranges against a user's stored time blocks."""

    def __init__(self, time_block_repo: ITimeBlockRepository):
        self.time_block_repo = time_block_repo

    async def conflicts_on_create(self, user_id: str, time_range: TimeRange) -> bool:
        """Check a new block against every block the user owns."""
        return await self.time_block_repo.exists_overlap(
            user_id, time_range.start_time, time_range.end_time
        )

    async def conflicts_on_update(
        self, user_id: str, time_block_id: UUID, time_range: TimeRange
    ) -> bool:
        """Check a moved block against the user's other blocks."""
        return await self.time_block_repo.exists_overlap(
            user_id,
            time_range.start_time,
            time_range.end_time,
            exclude_id=time_block_id,
        )
