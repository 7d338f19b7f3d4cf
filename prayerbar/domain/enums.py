"""Controlled enumerations for the prayerbar domain.

Every categorical setting MUST reference an enum defined here.
"""

from __future__ import annotations

from enum import Enum


class PrayerName(str, Enum):
    """Daily events the status bar knows how to display.

    Values match the keys of the timing service's ``data.timings`` mapping.
    """

    FAJR = "Fajr"
    SUNRISE = "Sunrise"
    DHUHR = "Dhuhr"
    ASR = "Asr"
    MAGHRIB = "Maghrib"
    ISHA = "Isha"
    MIDNIGHT = "Midnight"


class Language(str, Enum):
    """Languages available for calendar and header labels."""

    EN = "en"
    AR = "ar"


class CalendarKind(str, Enum):
    """Calendar whose date descriptor is shown in the tooltip."""

    HIJRI = "hijri"
    GREGORIAN = "gregorian"


DEFAULT_RECOGNIZED_EVENTS: tuple[str, ...] = tuple(p.value for p in PrayerName)
