"""In-memory snapshot cache.

Same contract as FileSnapshotCache, without touching the filesystem.
Useful when embedding the pipeline or exercising it in isolation.
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime, timedelta

from prayerbar.domain.snapshot import DaySnapshot
from prayerbar.foundation.clock import utc_now
from prayerbar.store.base import CacheCorruptError

logger = logging.getLogger(__name__)


class MemorySnapshotCache:
    """Dictionary of ``key -> (snapshot, modified_at)``."""

    def __init__(self) -> None:
        self._records: dict[str, tuple[DaySnapshot, datetime]] = {}

    def is_fresh(self, key: str, window: timedelta) -> bool:
        record = self._records.get(key)
        if record is None:
            return False
        return utc_now() - record[1] < window

    def load(self, key: str) -> DaySnapshot:
        record = self._records.get(key)
        if record is None:
            raise CacheCorruptError(key, "no record")
        return copy.deepcopy(record[0])

    def save(self, key: str, snapshot: DaySnapshot) -> None:
        self._records[key] = (copy.deepcopy(snapshot), utc_now())
        logger.debug("Cached snapshot for '%s' in memory", key)

    def put(self, key: str, snapshot: DaySnapshot, modified_at: datetime) -> None:
        """Seed a record with an explicit modification time."""
        self._records[key] = (copy.deepcopy(snapshot), modified_at)

    def __len__(self) -> int:
        return len(self._records)
