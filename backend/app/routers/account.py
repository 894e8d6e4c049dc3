"""
Account Router
==============
POST /api/auth/sync: Register the signed-in user on first login.

Called by the client right after sign-in. Safe to call on every login:
only the first call creates the users row.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.auth import get_current_user
from app.models.user import AuthenticatedUser, UserSyncResponse
from app.services.users import UserRegistry, get_user_registry

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/sync",
    response_model=UserSyncResponse,
    status_code=status.HTTP_200_OK,
    summary="Sync the signed-in user",
    responses={401: {"description": "Missing or invalid bearer token"}},
)
def sync_user(
    user: AuthenticatedUser = Depends(get_current_user),
    registry: UserRegistry = Depends(get_user_registry),
) -> UserSyncResponse:
    created = registry.sync(user)
    return UserSyncResponse(
        message="User synced successfully.",
        user_id=user.id,
        created=created,
    )
