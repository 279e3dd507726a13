"""Profile routes."""

from fastapi import APIRouter, Request

from ...db.repositories import UserProfileRepository
from ...errors import NotFoundError
from ..auth import CurrentUser
from ..schemas import ProfileUpdate

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
async def get_profile(request: Request, user: CurrentUser):
    profile = await UserProfileRepository(request.app.state.db_path).get_by_user(user.id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile.to_dict()


@router.patch("")
async def update_profile(request: Request, user: CurrentUser, body: ProfileUpdate):
    """Edit personal details. Training counters are not editable here."""
    profile = await UserProfileRepository(request.app.state.db_path).update_fields(
        user.id, body.model_dump(exclude_unset=True)
    )
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile.to_dict()
