"""Authenticated user routes."""

from fastapi import APIRouter, Request

from ...db.repositories import UserProfileRepository
from ..auth import CurrentUser

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/user")
async def get_user(request: Request, user: CurrentUser):
    """The caller's identity with their profile."""
    profile = await UserProfileRepository(request.app.state.db_path).get_by_user(user.id)
    return {**user.to_dict(), "profile": profile.to_dict() if profile else None}
