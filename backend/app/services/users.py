"""
User Registry
=============
Keeps a row per verified user in the users table. The row is created the
first time a user syncs after signing in; nothing else in the backend
depends on it existing, since entries are keyed by the token subject id.
"""

from __future__ import annotations

import logging

from supabase import Client

from app.config import get_settings
from app.db.supabase import get_supabase_client
from app.errors import InfrastructureError
from app.models.user import AuthenticatedUser

logger = logging.getLogger(__name__)


class UserRegistry:

    def __init__(self, db: Client) -> None:
        self._db = db
        self._table = get_settings().users_table

    def sync(self, user: AuthenticatedUser) -> bool:
        """Register *user* if unknown. Returns True when a row was created."""
        try:
            existing = (
                self._db.table(self._table)
                .select("id")
                .eq("id", user.id)
                .maybe_single()
                .execute()
            )
            if existing is not None and existing.data:
                logger.debug("User %s already registered", user.id)
                return False

            logger.info("Registering new user %s", user.id)
            self._db.table(self._table).insert({"id": user.id, "email": user.email}).execute()
        except Exception as exc:
            logger.exception("Failed to sync user %s", user.id)
            raise InfrastructureError("Failed to sync user") from exc

        return True


def get_user_registry() -> UserRegistry:
    return UserRegistry(get_supabase_client())
