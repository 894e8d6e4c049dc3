"""
Mood Entries Router
===================
POST   /api/moods           : Log a mood entry.
GET    /api/moods/recent    : Entries from the last N days, newest first.
GET    /api/moods/trend     : Daily average rating for the last N days.
GET    /api/moods/{id}      : One entry.
PUT    /api/moods/{id}      : Partial update.
DELETE /api/moods/{id}      : Permanent delete.

Every endpoint requires a bearer token. The owner of an entry is always
the token subject; it is never read from the request body. Validation
and ownership rules live in ``MoodEntryService`` and surface here as
``MoodTrackerError`` subclasses, which ``app.main`` maps to responses.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.auth import get_current_user
from app.models.mood import (
    MoodCreatedResponse,
    MoodEntry,
    MoodEntryCreate,
    MoodEntryUpdate,
    MoodMessageResponse,
    MoodTrendResponse,
    RecentMoodsResponse,
)
from app.models.user import AuthenticatedUser
from app.services.mood_entries import MoodEntryService, get_mood_entry_service
from app.services.trends import bucket_by_day

router = APIRouter(prefix="/api/moods", tags=["moods"])

_AUTH_RESPONSES = {401: {"description": "Missing or invalid bearer token"}}
_ENTRY_RESPONSES = {
    **_AUTH_RESPONSES,
    403: {"description": "Entry belongs to another user"},
    404: {"description": "Entry not found"},
}
_DAYS_QUERY = Query(
    default=None,
    description="Window size in days. Defaults to the server's recent_window_days.",
)


@router.post(
    "",
    response_model=MoodCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a mood entry",
    responses={**_AUTH_RESPONSES, 400: {"description": "Invalid rating or timestamp"}},
)
def submit_mood(
    body: MoodEntryCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: MoodEntryService = Depends(get_mood_entry_service),
) -> MoodCreatedResponse:
    mood_id = service.submit(
        user.id,
        rating=body.rating,
        notes=body.notes,
        recorded_at=body.recorded_at,
    )
    return MoodCreatedResponse(message="Mood entry added successfully.", mood_id=mood_id)


@router.get(
    "/recent",
    response_model=RecentMoodsResponse,
    summary="List recent mood entries",
    responses={**_AUTH_RESPONSES, 400: {"description": "Invalid window"}},
)
def list_recent_moods(
    days: Optional[int] = _DAYS_QUERY,
    user: AuthenticatedUser = Depends(get_current_user),
    service: MoodEntryService = Depends(get_mood_entry_service),
) -> RecentMoodsResponse:
    moods = service.list_recent(user.id, days)
    return RecentMoodsResponse(moods=moods)


@router.get(
    "/trend",
    response_model=MoodTrendResponse,
    summary="Daily average mood",
    description=(
        "Average rating per UTC calendar day over the window, oldest first. "
        "Days without entries are omitted; an empty list means there is no data to chart."
    ),
    responses={**_AUTH_RESPONSES, 400: {"description": "Invalid window"}},
)
def get_mood_trend(
    days: Optional[int] = _DAYS_QUERY,
    user: AuthenticatedUser = Depends(get_current_user),
    service: MoodEntryService = Depends(get_mood_entry_service),
) -> MoodTrendResponse:
    window = days if days is not None else service.default_window_days
    entries = service.list_recent(user.id, window)
    return MoodTrendResponse(days=window, trend=bucket_by_day(entries))


@router.get(
    "/{entry_id}",
    response_model=MoodEntry,
    summary="Get one mood entry",
    responses=_ENTRY_RESPONSES,
)
def get_mood(
    entry_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: MoodEntryService = Depends(get_mood_entry_service),
) -> MoodEntry:
    return service.get(user.id, entry_id)


@router.put(
    "/{entry_id}",
    response_model=MoodMessageResponse,
    summary="Update a mood entry",
    responses={**_ENTRY_RESPONSES, 400: {"description": "Invalid rating or timestamp"}},
)
def update_mood(
    entry_id: str,
    body: MoodEntryUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: MoodEntryService = Depends(get_mood_entry_service),
) -> MoodMessageResponse:
    service.update(user.id, entry_id, body.model_dump(exclude_unset=True))
    return MoodMessageResponse(message="Mood entry updated successfully.")


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a mood entry",
    responses=_ENTRY_RESPONSES,
)
def delete_mood(
    entry_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: MoodEntryService = Depends(get_mood_entry_service),
) -> Response:
    service.delete(user.id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
