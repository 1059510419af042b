"""
Time block range view.
"""

from datetime import date

from fastapi import APIRouter, Query

from nutshell.api.deps import CurrentUser, TimeBlockServiceDep
from nutshell.models.time_block import TaskTimeBlocks

router = APIRouter()


@router.get("", response_model=list[TaskTimeBlocks])
async def get_time_blocks(
    user: CurrentUser,
    service: TimeBlockServiceDep,
    start_date: date = Query(..., description="First day of the window"),
    range_days: int = Query(1, alias="range", description="Number of days"),
):
    """List tasks with their time blocks over a window of days."""
    return await service.get_time_blocks(user.id, start_date, range_days)
