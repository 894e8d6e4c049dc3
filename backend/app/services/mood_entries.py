"""
Mood Entry Service
==================
Create, read, update and delete a user's mood entries.

Rules enforced here, not in the router:
    1. ``rating`` is an integer in 1..5. Anything else is rejected, never
       clamped.
    2. ``owner_id`` comes from the verified caller and is written once,
       at creation. Patches cannot touch it.
    3. Every read, update and delete of a single entry loads it first and
       checks ``owner_id == caller_id`` before doing anything else.
    4. ``recorded_at`` is normalised to UTC before it is stored.

Each mutation is one write against the store. Store failures are logged
and raised as ``InfrastructureError``; nothing is retried here.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional, Union

from supabase import Client

from app.config import Settings, get_settings
from app.db.supabase import get_supabase_client
from app.errors import (
    AuthorizationError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)
from app.models.mood import MAX_RATING, MIN_RATING, MoodEntry

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"rating", "notes", "recorded_at"})

Timestamp = Union[datetime, str]


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def validate_rating(rating: Any) -> int:
    # bool is an int subclass; True must not pass as a rating of 1
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}.")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}."
        )
    return rating


def normalise_timestamp(value: Any) -> datetime:
    """Parse *value* into an aware UTC datetime.

    Accepts datetimes and ISO-8601 strings (a trailing ``Z`` is allowed).
    Naive values are taken to be UTC.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValidationError(f"recordedAt is not a valid timestamp: {value!r}") from exc
    if not isinstance(value, datetime):
        raise ValidationError("recordedAt must be an ISO-8601 timestamp.")

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate_window(window_days: Any, max_days: int) -> int:
    if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days < 1:
        raise ValidationError("days must be a positive integer.")
    if window_days > max_days:
        raise ValidationError(f"days must be at most {max_days}.")
    return window_days


def parse_entry_id(entry_id: str) -> Optional[str]:
    """Canonical form of *entry_id*, or None if it cannot be a row id."""
    try:
        return str(uuid.UUID(entry_id))
    except (TypeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class MoodEntryService:
    """Mood entry lifecycle on top of the Supabase mood table."""

    def __init__(self, db: Client, settings: Optional[Settings] = None) -> None:
        self._db = db
        self._settings = settings or get_settings()
        self._table = self._settings.mood_table

    @property
    def default_window_days(self) -> int:
        return self._settings.recent_window_days

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def submit(
        self,
        caller_id: str,
        rating: Any,
        notes: Optional[str] = None,
        recorded_at: Optional[Timestamp] = None,
    ) -> str:
        """Store a new entry owned by *caller_id* and return its id."""
        rating = validate_rating(rating)
        when = (
            normalise_timestamp(recorded_at)
            if recorded_at is not None
            else datetime.now(timezone.utc)
        )

        row = {
            "owner_id": caller_id,
            "rating": rating,
            "notes": notes or "",
            "recorded_at": when.isoformat(),
        }
        result = self._execute(self._db.table(self._table).insert(row), "insert mood entry")

        if not result.data:
            logger.error("Insert returned no row for user %s", caller_id)
            raise InfrastructureError("Failed to save mood entry")

        entry_id = str(result.data[0]["id"])
        logger.info("Mood entry %s created for user %s", entry_id, caller_id)
        return entry_id

    def update(self, caller_id: str, entry_id: str, patch: Mapping[str, Any]) -> None:
        """Apply the fields present in *patch*; absent fields keep their value."""
        entry = self.get(caller_id, entry_id)

        unknown = set(patch) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        changes: dict[str, Any] = {}
        if "rating" in patch:
            changes["rating"] = validate_rating(patch["rating"])
        if "notes" in patch:
            changes["notes"] = patch["notes"] or ""
        if "recorded_at" in patch:
            if patch["recorded_at"] is None:
                raise ValidationError("recordedAt cannot be null.")
            changes["recorded_at"] = normalise_timestamp(patch["recorded_at"]).isoformat()

        if not changes:
            logger.debug("Empty patch for mood entry %s, nothing written", entry_id)
            return

        self._execute(
            self._db.table(self._table).update(changes).eq("id", entry.id),
            "update mood entry",
        )
        logger.info("Mood entry %s updated (%s)", entry_id, ", ".join(sorted(changes)))

    def delete(self, caller_id: str, entry_id: str) -> None:
        """Permanently remove an entry."""
        entry = self.get(caller_id, entry_id)

        self._execute(
            self._db.table(self._table).delete().eq("id", entry.id),
            "delete mood entry",
        )
        logger.info("Mood entry %s deleted by user %s", entry_id, caller_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, caller_id: str, entry_id: str) -> MoodEntry:
        """Load one entry, checking existence and then ownership."""
        # ids are uuids; anything else would be rejected by the store as a bad request
        canonical_id = parse_entry_id(entry_id)
        if canonical_id is None:
            raise NotFoundError("Mood entry not found.")

        result = self._execute(
            self._db.table(self._table).select("*").eq("id", canonical_id).maybe_single(),
            "fetch mood entry",
        )

        # supabase-py returns None from maybe_single() when no row matches
        if result is None or not result.data:
            raise NotFoundError("Mood entry not found.")

        entry = MoodEntry.from_row(result.data)
        if entry.owner_id != caller_id:
            logger.warning(
                "User %s attempted to access mood entry %s owned by another user",
                caller_id,
                entry_id,
            )
            if self._settings.conceal_foreign_entries:
                raise NotFoundError("Mood entry not found.")
            raise AuthorizationError("You do not have access to this mood entry.")

        return entry

    def list_recent(self, caller_id: str, window_days: Optional[int] = None) -> list[MoodEntry]:
        """Entries recorded in the last *window_days* days, newest first."""
        if window_days is None:
            window_days = self._settings.recent_window_days
        window_days = validate_window(window_days, self._settings.max_window_days)

        cutoff = datetime.now(timezone.utc) - timedelta(days=window_days)

        result = self._execute(
            self._db.table(self._table)
            .select("*")
            .eq("owner_id", caller_id)
            .gte("recorded_at", cutoff.isoformat())
            .order("recorded_at", desc=True),
            "list mood entries",
        )

        return [MoodEntry.from_row(row) for row in (result.data or [])]

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    @staticmethod
    def _execute(query: Any, action: str) -> Any:
        try:
            return query.execute()
        except Exception as exc:
            logger.exception("Entry store failed to %s", action)
            raise InfrastructureError("The mood store is unavailable, please try again later.") from exc


def get_mood_entry_service() -> MoodEntryService:
    return MoodEntryService(get_supabase_client())
