"""Workout session routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from ...services import SessionService
from ..auth import CurrentUser
from ..dependencies import get_session_service
from ..schemas import SessionCreate, SessionUpdate

router = APIRouter(prefix="/api/sessions", tags=["sessions"])

Service = Annotated[SessionService, Depends(get_session_service)]


@router.post("")
async def create_session(user: CurrentUser, service: Service, body: SessionCreate):
    session = await service.create_session(user.id, body.model_dump())
    return session.to_dict()


@router.get("")
async def list_sessions(
    user: CurrentUser,
    service: Service,
    limit: int = Query(10, ge=1, le=100),
):
    return [s.to_dict() for s in await service.list_sessions(user.id, limit)]


@router.patch("/{session_id}")
async def update_session(
    user: CurrentUser,
    service: Service,
    session_id: str,
    body: SessionUpdate,
):
    """Partially update a session. Completing it updates profile and plan progress."""
    session = await service.update_session(
        user.id, session_id, body.model_dump(exclude_unset=True)
    )
    return session.to_dict()
