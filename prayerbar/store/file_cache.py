"""File-backed snapshot cache.

Design notes:
    - One JSON file per city: ``<directory>/prayerbar-<city>.json``.
    - The file holds the snapshot exactly as received, pretty-printed.
    - The file's modification time is the only freshness signal; no
      timestamp is stored inside the document.
    - Two processes refreshing the same city race on write and the last
      writer wins.  The content is identical for a given day.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path

from prayerbar.domain.snapshot import DaySnapshot
from prayerbar.foundation.clock import utc_now
from prayerbar.store.base import CacheCorruptError, CacheWriteError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^\w.-]+")


class FileSnapshotCache:
    """Stores one snapshot per location key under *directory*."""

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """Deterministic cache path for a location key."""
        safe = _UNSAFE_CHARS.sub("_", key.strip())
        return self._directory / f"prayerbar-{safe}.json"

    def modified_at(self, key: str) -> datetime | None:
        """UTC modification time of the record, or None if unavailable."""
        try:
            mtime = self.path_for(key).stat().st_mtime
        except OSError:
            return None
        return datetime.fromtimestamp(mtime, tz=timezone.utc)

    def is_fresh(self, key: str, window: timedelta) -> bool:
        modified = self.modified_at(key)
        if modified is None:
            logger.debug("No cached snapshot for '%s'", key)
            return False
        age = utc_now() - modified
        fresh = age < window
        logger.debug("Cached snapshot for '%s' is %s old (fresh=%s)", key, age, fresh)
        return fresh

    def load(self, key: str) -> DaySnapshot:
        path = self.path_for(key)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CacheCorruptError(key, f"cannot read {path}: {exc}") from exc

        try:
            snapshot = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CacheCorruptError(key, f"invalid JSON in {path}: {exc}") from exc

        if not isinstance(snapshot, dict):
            raise CacheCorruptError(key, f"expected a JSON object in {path}")

        logger.info("Loaded cached snapshot for '%s' from %s", key, path)
        return snapshot

    def save(self, key: str, snapshot: DaySnapshot) -> None:
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(snapshot, indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except (OSError, TypeError, ValueError) as exc:
            raise CacheWriteError(key, f"cannot write {path}: {exc}") from exc
        logger.info("Cached snapshot for '%s' at %s", key, path)
