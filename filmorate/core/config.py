"""
Configuration helpers for the Filmorate backend.

Routers/services never read os.environ directly; they go through
``get_settings()`` so tests can override values with monkeypatch and
``get_settings.cache_clear()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEV_ORIGINS = (
    "http://localhost:8000",
    "http://127.0.0.1:8000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    project_name: str
    log_level: str
    log_file: str
    popular_default_count: int
    cors_origins: tuple[str, ...]

    @property
    def allowed_origins(self) -> list[str]:
        origins = set(self.cors_origins)
        if self.app_env != "prod":
            origins.update(DEV_ORIGINS)
        return sorted(o for o in origins if o)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _list(value: str | None) -> tuple[str, ...]:
        return tuple(x.strip().rstrip("/") for x in (value or "").split(",") if x.strip())

    popular = _int(os.getenv("POPULAR_DEFAULT_COUNT"), 10)
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        project_name=os.getenv("PROJECT_NAME", "Filmorate API"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("LOG_FILE", ""),
        popular_default_count=popular if popular >= 1 else 10,
        cors_origins=_list(os.getenv("CORS_ORIGINS")),
    )
