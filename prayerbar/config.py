"""Application configuration loaded from environment variables.

Command-line flags are applied on top through load_settings().
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings

from prayerbar.domain.enums import DEFAULT_RECOGNIZED_EVENTS, CalendarKind, Language

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    log_level: str = "WARNING"

    # Location and calculation method, passed through to the timing service
    city: str = ""
    country: str = ""
    method: str = ""

    # Presentation
    language: Language = Language.EN
    calendar: CalendarKind = CalendarKind.HIJRI
    recognized_events: list[str] = list(DEFAULT_RECOGNIZED_EVENTS)
    next_event_prefix: str = "\U0001F54B "

    # Cache
    cache_dir: Path = Path(tempfile.gettempdir())
    freshness_window_minutes: int = 180

    # Timing service
    api_base_url: str = "http://api.aladhan.com/v1"
    fetch_max_attempts: int = 20
    fetch_base_delay_ms: int = 500
    fetch_timeout_seconds: float = 10.0

    model_config = {"env_prefix": "PRAYERBAR_"}

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


def load_settings(**overrides: Any) -> Settings:
    """Build Settings from the environment, letting non-None *overrides* win."""
    return Settings(**{k: v for k, v in overrides.items() if v is not None})
