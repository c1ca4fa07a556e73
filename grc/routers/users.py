"""Current-user endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from grc.auth import Caller, get_caller
from grc.schemas.organization import UserResponse
from grc.services.organizations import require_caller
from grc.store import data_store

router = APIRouter(tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_logged_in_user(caller: Caller | None = Depends(get_caller)) -> UserResponse:
    """The authenticated user; name and email are empty if the user is not mirrored locally."""
    user_id = require_caller(caller)
    user = data_store.users.get(user_id) or {"id": user_id}
    return UserResponse(**user)
