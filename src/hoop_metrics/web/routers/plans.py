"""Fitness plan catalog routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from ...services import PlanService
from ..auth import CurrentUser
from ..dependencies import get_plan_service

router = APIRouter(prefix="/api/fitness-plans", tags=["plans"])

Service = Annotated[PlanService, Depends(get_plan_service)]


@router.get("")
async def list_plans(
    user: CurrentUser,
    service: Service,
    limit: int = Query(20, ge=1, le=100),
):
    return [plan.to_dict() for plan in await service.list_plans(limit)]


@router.get("/{plan_id}")
async def get_plan(user: CurrentUser, service: Service, plan_id: str):
    """A plan with its schedule ordered by week, day and order."""
    plan = await service.get_plan_with_workouts(plan_id)
    return plan.to_dict(include_schedule=True)
