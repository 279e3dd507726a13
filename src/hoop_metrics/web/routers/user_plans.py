"""Plan enrollment routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ...services import PlanService
from ..auth import CurrentUser
from ..dependencies import get_plan_service
from ..schemas import StartPlanRequest

router = APIRouter(prefix="/api/user-plans", tags=["plans"])

Service = Annotated[PlanService, Depends(get_plan_service)]


@router.get("")
async def list_active_plans(user: CurrentUser, service: Service):
    return await service.list_active_plans(user.id)


@router.post("/start")
async def start_plan(user: CurrentUser, service: Service, body: StartPlanRequest):
    enrollment = await service.start_plan(user.id, body.plan_id)
    return enrollment.to_dict()


@router.get("/{plan_id}/progress")
async def get_progress(user: CurrentUser, service: Service, plan_id: str):
    return await service.get_progress(user.id, plan_id)


@router.post("/{user_plan_id}/pause")
async def pause_plan(user: CurrentUser, service: Service, user_plan_id: str):
    enrollment = await service.pause_plan(user.id, user_plan_id)
    return enrollment.to_dict()


@router.post("/{user_plan_id}/resume")
async def resume_plan(user: CurrentUser, service: Service, user_plan_id: str):
    enrollment = await service.resume_plan(user.id, user_plan_id)
    return enrollment.to_dict()
