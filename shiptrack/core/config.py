"""
Configuration helpers for the shiptrack backend.

Exposes a frozen Settings object built from environment variables so that
routers/services never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

_DEV_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    session_ttl_seconds: int
    log_level: str
    cors_origins: tuple[str, ...]
    activity_weeks: int
    leaderboard_size: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _origins(value: str | None, app_env: str) -> tuple[str, ...]:
        if value:
            return tuple(o.strip().rstrip("/") for o in value.split(",") if o.strip())
        return () if app_env == "prod" else _DEV_ORIGINS

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    default_level = "DEBUG" if app_env == "dev" else "INFO"
    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL", "sqlite:///./shiptrack.db"),
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS"), 86400),
        log_level=(os.getenv("LOG_LEVEL") or default_level).upper(),
        cors_origins=_origins(os.getenv("CORS_ORIGINS"), app_env),
        activity_weeks=_int(os.getenv("ACTIVITY_WEEKS"), 7),
        leaderboard_size=_int(os.getenv("LEADERBOARD_SIZE"), 5),
    )
