"""
Application settings.

Values are read from environment variables once, when this module is
first imported.  Defaults are suitable for local development with a
SQLite file next to the working directory.
"""

import os
from dataclasses import dataclass

DEFAULT_SESSION_TTL_HOURS = 24


def _positive_int_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Purrfect Sitters API")
    api_version: str = os.getenv("API_VERSION", "0.1.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./purrfect_sitters.db")

    # Server-side sessions expire this many hours after login.
    session_ttl_hours: int = _positive_int_env("SESSION_TTL_HOURS", DEFAULT_SESSION_TTL_HOURS)
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "session_token")
    session_cookie_secure: bool = os.getenv("SESSION_COOKIE_SECURE", "false").lower() in {"1", "true", "yes"}


settings = Settings()
