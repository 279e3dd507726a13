"""Dashboard route."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ...services import DashboardService
from ..auth import CurrentUser
from ..dependencies import get_dashboard_service

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard(
    user: CurrentUser,
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
):
    """Stats, unlocked achievements, leaderboard and recent activity."""
    return await service.get_dashboard(user.id)
