"""
Daylight Configuration
======================
All environment variables in one place. Pydantic Settings validates
types at startup so a bad value fails on boot, not on the first request.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Loaded from environment variables or a .env file."""

    # --- Supabase (entry store + identity provider) ---
    supabase_url: str = "http://localhost:54321"
    supabase_service_key: str = ""  # service_role key for backend operations

    # --- Tables ---
    mood_table: str = "mood_ratings"
    users_table: str = "users"

    # --- Mood entries ---
    # Window used by /moods/recent and /moods/trend when the client
    # does not send ?days=N.
    recent_window_days: int = 30
    # When True a non-owner gets 404 instead of 403, so entry ids
    # cannot be probed for existence.
    conceal_foreign_entries: bool = False
    # Upper bound for ?days=N on /moods/recent and /moods/trend.
    max_window_days: int = 3650

    # --- App settings ---
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
