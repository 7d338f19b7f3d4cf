"""Shapes around the timing service's daily response.

The raw response (a DaySnapshot) stays a plain decoded JSON mapping: the
core only reads a handful of fields from it and never mutates it.  The
models here are the typed values extracted from, or sent to, the service.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# The decoded JSON document returned by the timing service for one day.
DaySnapshot = dict[str, Any]


class Location(BaseModel):
    """City and country as passed to the timing service."""

    city: str = ""
    country: str = ""

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return ", ".join(part for part in (self.city, self.country) if part)


class CalendarDescriptor(BaseModel):
    """Localised calendar date shown in the tooltip header."""

    date: str = Field(..., min_length=1, description="Date as reported, e.g. 03-04-1446")
    month: str = Field(..., description="Month name in the selected language")
    weekday: str = Field(..., description="Weekday name in the selected language")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.date} {self.month} {self.weekday}"
