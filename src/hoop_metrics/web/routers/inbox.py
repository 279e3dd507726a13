"""Workout inbox routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ...services import InboxService
from ..auth import CurrentUser
from ..dependencies import get_inbox_service
from ..schemas import CategorizeRequest

router = APIRouter(prefix="/api/workout-inbox", tags=["inbox"])

Service = Annotated[InboxService, Depends(get_inbox_service)]


@router.get("")
async def list_inbox(user: CurrentUser, service: Service):
    """The caller's inbox, newest first. An empty inbox is given sample items once."""
    await service.ensure_seeded(user.id)
    return [item.to_dict() for item in await service.list_items(user.id)]


@router.post("/{item_id}/categorize")
async def categorize_item(
    user: CurrentUser,
    service: Service,
    item_id: str,
    body: CategorizeRequest,
):
    item = await service.categorize(user.id, item_id, body.category)
    return item.to_dict()


@router.post("/{item_id}/ignore")
async def ignore_item(user: CurrentUser, service: Service, item_id: str):
    item = await service.ignore(user.id, item_id)
    return item.to_dict()
