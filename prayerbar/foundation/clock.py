"""Timezone-aware clock utilities.

All timestamps in prayerbar MUST be timezone-aware.  This module is the
single source of "now" so tests can monkey-patch it trivially.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def local_now() -> datetime:
    """Return the current local time, carrying the local UTC offset."""
    return datetime.now().astimezone()
