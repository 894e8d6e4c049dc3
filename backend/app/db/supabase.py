"""
Supabase Client
===============
Single configured Supabase client shared by the entry store, the user
registry and the bearer-token check.

Uses the service_role key because the backend writes mood entries on
behalf of the verified caller; ownership is enforced in
``MoodEntryService``, not by row-level security.
"""

from functools import lru_cache

from supabase import Client, create_client

from app.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_service_key)
