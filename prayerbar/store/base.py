"""Snapshot cache protocol and its failure types.

A SnapshotCache memoises the timing service's daily response across
process invocations.  The pipeline depends only on this protocol, so
implementations can change persistence without touching fetch logic.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from prayerbar.domain.snapshot import DaySnapshot


class CacheCorruptError(Exception):
    """Raised when a stored snapshot cannot be read back as a JSON object."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Cached snapshot for '{key}' is unusable: {reason}")


class CacheWriteError(Exception):
    """Raised when a snapshot cannot be persisted."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Could not cache snapshot for '{key}': {reason}")


class SnapshotCache(Protocol):
    """Protocol for per-location snapshot storage."""

    def is_fresh(self, key: str, window: timedelta) -> bool:
        """Return True iff a record exists for *key* and is younger than *window*.

        Must never raise: unreadable metadata counts as "not fresh".
        """
        ...

    def load(self, key: str) -> DaySnapshot:
        """Return the stored snapshot.

        Raises:
            CacheCorruptError: If the record is missing, unreadable or not JSON.
        """
        ...

    def save(self, key: str, snapshot: DaySnapshot) -> None:
        """Persist *snapshot*, replacing any previous record.

        Raises:
            CacheWriteError: If the record cannot be written.
        """
        ...
