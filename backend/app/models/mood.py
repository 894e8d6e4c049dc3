"""
Mood Entry Schemas
==================
Pydantic models for the mood entry API. These are the contract between
the web client and the backend.

Key design decisions:
- JSON field names are camelCase (``recordedAt``, ``moodId``) to match
  the client; snake_case is accepted on input as well.
- ``owner_id`` is never accepted from the client. It is set from the
  verified bearer token inside ``MoodEntryService``.
- ``recorded_at`` (when the mood applies) and ``created_at`` (when the
  store wrote the row) are separate fields and stay separate.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


MIN_RATING = 1
MAX_RATING = 5


class _ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Stored entry
# ---------------------------------------------------------------------------

class MoodEntry(_ApiModel):
    """One row of the mood table as read back from the store."""

    id: str
    owner_id: str
    rating: int
    notes: str = ""
    recorded_at: datetime
    created_at: Optional[datetime] = None

    @field_validator("recorded_at", "created_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # timestamptz columns come back with an offset; anything naive is UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def _null_notes(cls, value: Optional[str]) -> str:
        return value or ""

    @classmethod
    def from_row(cls, row: dict) -> "MoodEntry":
        return cls(
            id=str(row["id"]),
            owner_id=row["owner_id"],
            rating=row["rating"],
            notes=row.get("notes"),
            recorded_at=row["recorded_at"],
            created_at=row.get("created_at"),
        )


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class MoodEntryCreate(_ApiModel):
    """Payload the client sends when the user logs a mood."""

    rating: int = Field(
        ...,
        ge=MIN_RATING,
        le=MAX_RATING,
        strict=True,
        description="Self-reported mood. 1 = very low, 5 = great.",
    )
    notes: Optional[str] = Field(default=None, description="Free-text notes.")
    recorded_at: Optional[datetime] = Field(
        default=None,
        description="When the mood applies. Defaults to the time of submission.",
    )


class MoodEntryUpdate(_ApiModel):
    """Partial update. Only the fields present in the body are changed."""

    rating: Optional[int] = Field(default=None, ge=MIN_RATING, le=MAX_RATING, strict=True)
    notes: Optional[str] = None
    recorded_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class MoodCreatedResponse(_ApiModel):
    message: str
    mood_id: str


class MoodMessageResponse(_ApiModel):
    message: str


class RecentMoodsResponse(_ApiModel):
    """Entries inside the window, newest first."""

    moods: list[MoodEntry]


class DayAverage(_ApiModel):
    """Average rating of one UTC calendar day."""

    date: date
    average_rating: float


class MoodTrendResponse(_ApiModel):
    """Day-bucketed averages, oldest first. Empty when there is no data."""

    days: int
    trend: list[DayAverage]
