"""AI trainer routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from ...agents import AITrainer
from ...db.repositories import SessionRepository, UserProfileRepository
from ...services import DashboardService
from ..auth import CurrentUser
from ..dependencies import get_dashboard_service, get_trainer
from ..schemas import GenerateWorkoutRequest

router = APIRouter(prefix="/api/ai", tags=["ai"])

Trainer = Annotated[AITrainer, Depends(get_trainer)]

# Sessions sent to the model for insights
INSIGHT_SESSION_COUNT = 5


@router.post("/generate-workout")
async def generate_workout(
    request: Request,
    user: CurrentUser,
    trainer: Trainer,
    dashboard: Annotated[DashboardService, Depends(get_dashboard_service)],
    body: GenerateWorkoutRequest | None = None,
):
    """Generate a personalized workout. The result is returned, not stored."""
    body = body or GenerateWorkoutRequest()
    profile = await UserProfileRepository(request.app.state.db_path).get_by_user(user.id)
    stats = await dashboard.get_stats(user.id)
    return await trainer.generate_personalized_workout(
        profile, stats, body.preferences.model_dump(exclude_none=True)
    )


@router.post("/workout-insights")
async def workout_insights(request: Request, user: CurrentUser, trainer: Trainer):
    db_path = request.app.state.db_path
    sessions = await SessionRepository(db_path).list_for_user(user.id, INSIGHT_SESSION_COUNT)
    profile = await UserProfileRepository(db_path).get_by_user(user.id)
    return await trainer.generate_insights(sessions, profile)
