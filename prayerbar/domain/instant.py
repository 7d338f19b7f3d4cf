"""NamedInstant: a named point in time for the current day.

An instant is either a daily event reported by the timing service
(e.g. ``Fajr``) or the synthetic sentinel marking "now".  Instants are
validated at construction so the rotator never has to re-check offsets.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

SENTINEL_NAME = "Current_time"


class NamedInstant(BaseModel):
    """An event name bound to a timezone-aware timestamp.

    Immutable after creation.
    """

    name: str = Field(..., min_length=1, max_length=64, description="Event name or the sentinel")
    at: datetime = Field(..., description="When the event happens (must carry a UTC offset)")

    model_config = {"frozen": True}

    @field_validator("at")
    @classmethod
    def at_must_be_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None or v.utcoffset() is None:
            raise ValueError("instant must carry a UTC offset")
        return v

    @classmethod
    def sentinel(cls, now: datetime) -> NamedInstant:
        """Build the "now" marker inserted once per run."""
        return cls(name=SENTINEL_NAME, at=now)

    @property
    def is_sentinel(self) -> bool:
        return self.name == SENTINEL_NAME

    @property
    def clock_time(self) -> str:
        """Local wall-clock time as ``HH:MM``."""
        return self.at.strftime("%H:%M")

    def __str__(self) -> str:
        return f"{self.name} {self.clock_time}"
