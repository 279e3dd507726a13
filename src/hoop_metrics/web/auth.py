"""Caller identity resolution.

Every API route depends on ``get_current_user``. It trusts an ``X-User-Id``
header naming an existing user; deployments behind a real identity provider
replace it through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Header, Request

from ..db.repositories import UserRepository
from ..errors import UnauthorizedError
from ..models.user import User


async def get_current_user(
    request: Request,
    x_user_id: Annotated[str | None, Header()] = None,
) -> User:
    if not x_user_id:
        raise UnauthorizedError("Unauthorized")
    user = await UserRepository(request.app.state.db_path).get(x_user_id)
    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
