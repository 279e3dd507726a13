"""Workout catalog routes."""

from fastapi import APIRouter, Query, Request

from ...db.repositories import WorkoutRepository
from ...errors import NotFoundError
from ..auth import CurrentUser

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


@router.get("")
async def list_workouts(
    request: Request,
    user: CurrentUser,
    limit: int = Query(20, ge=1, le=100),
):
    workouts = await WorkoutRepository(request.app.state.db_path).list_recent(limit)
    return [w.to_dict(include_exercises=False) for w in workouts]


@router.get("/{workout_id}")
async def get_workout(request: Request, user: CurrentUser, workout_id: str):
    """A workout with its exercises in order."""
    workout = await WorkoutRepository(request.app.state.db_path).get(workout_id)
    if workout is None:
        raise NotFoundError("Workout not found")
    return workout.to_dict()
