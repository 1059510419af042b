"""
User profile endpoints.
"""

from fastapi import APIRouter

from nutshell.api.deps import CurrentUser, UserRepo
from nutshell.models.user import UserAccount, UserProfileUpdate
from nutshell.services.task_utils import resolve_user

router = APIRouter()


@router.get("/me", response_model=UserAccount)
async def get_current_user_profile(
    user: CurrentUser,
    user_repo: UserRepo,
) -> UserAccount:
    return await resolve_user(user_repo, user.id)


@router.put("/me", response_model=UserAccount)
async def update_current_user_profile(
    profile: UserProfileUpdate,
    user: CurrentUser,
    user_repo: UserRepo,
) -> UserAccount:
    """Register the caller or update the fields sent in the request."""
    return await user_repo.upsert(user.id, profile)
