"""Tests for the snapshot caches.

Freshness checks patch prayerbar.store.file_cache.utc_now and pin the
file's modification time with os.utime.
"""

from __future__ import annotations

import json
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from prayerbar.store.base import CacheCorruptError, CacheWriteError
from prayerbar.store.file_cache import FileSnapshotCache
from prayerbar.store.memory_cache import MemorySnapshotCache

from tests.test_extractor import _valid_snapshot


# ── Helpers ──────────────────────────────────────────────────────────────────

_BASE = datetime(2026, 10, 16, 9, 0, 0, tzinfo=timezone.utc)
_WINDOW = timedelta(hours=3)


def _patched_now(dt: datetime):
    """Freeze utc_now() as seen by the file cache."""
    return patch("prayerbar.store.file_cache.utc_now", return_value=dt)


def _saved_at(cache: FileSnapshotCache, key: str, when: datetime) -> Path:
    cache.save(key, _valid_snapshot())
    path = cache.path_for(key)
    os.utime(path, (when.timestamp(), when.timestamp()))
    return path


# ── File Cache ───────────────────────────────────────────────────────────────


class TestFileCachePaths:
    def test_path_derived_from_city(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        assert cache.path_for("Cairo") == tmp_path / "prayerbar-Cairo.json"

    def test_path_is_deterministic(self, tmp_path: Path) -> None:
        assert FileSnapshotCache(tmp_path).path_for("Cairo") == FileSnapshotCache(tmp_path).path_for("Cairo")

    def test_unsafe_characters_replaced(self, tmp_path: Path) -> None:
        path = FileSnapshotCache(tmp_path).path_for("../New York")
        assert path.parent == tmp_path
        assert path.name == "prayerbar-.._New_York.json"

    def test_distinct_cities_get_distinct_files(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        assert cache.path_for("Cairo") != cache.path_for("Giza")


class TestFileCacheFreshness:
    def test_missing_file_not_fresh(self, tmp_path: Path) -> None:
        assert not FileSnapshotCache(tmp_path).is_fresh("Cairo", _WINDOW)

    def test_fresh_just_before_window(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        _saved_at(cache, "Cairo", _BASE)
        with _patched_now(_BASE + _WINDOW - timedelta(seconds=1)):
            assert cache.is_fresh("Cairo", _WINDOW)

    def test_stale_once_window_elapses(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        _saved_at(cache, "Cairo", _BASE)
        with _patched_now(_BASE + _WINDOW):
            assert not cache.is_fresh("Cairo", _WINDOW)
        with _patched_now(_BASE + _WINDOW + timedelta(seconds=1)):
            assert not cache.is_fresh("Cairo", _WINDOW)

    def test_freshness_is_monotonic(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        _saved_at(cache, "Cairo", _BASE)
        results = []
        for minutes in range(0, 240, 10):
            with _patched_now(_BASE + timedelta(minutes=minutes)):
                results.append(cache.is_fresh("Cairo", _WINDOW))
        # True up to the edge, False from then on
        assert results == sorted(results, reverse=True)
        assert results.count(True) == 18

    def test_window_is_configurable(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        _saved_at(cache, "Cairo", _BASE)
        with _patched_now(_BASE + timedelta(minutes=30)):
            assert not cache.is_fresh("Cairo", timedelta(minutes=10))
            assert cache.is_fresh("Cairo", timedelta(hours=3))

    def test_modified_at_reads_mtime(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        _saved_at(cache, "Cairo", _BASE)
        assert cache.modified_at("Cairo") == _BASE
        assert cache.modified_at("Giza") is None


class TestFileCacheRoundTrip:
    def test_save_then_load_preserves_snapshot(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        snapshot = _valid_snapshot()
        cache.save("Cairo", snapshot)
        loaded = cache.load("Cairo")
        assert loaded == snapshot
        assert loaded["data"]["timings"] == snapshot["data"]["timings"]

    def test_file_is_pretty_printed_utf8(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        cache.save("Cairo", _valid_snapshot())
        text = cache.path_for("Cairo").read_text(encoding="utf-8")
        assert text.startswith('{\n  "code": 200')
        assert "الجمعة" in text

    def test_save_overwrites_previous_record(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        cache.save("Cairo", _valid_snapshot(timings={"Fajr": "05:00"}))
        cache.save("Cairo", _valid_snapshot(timings={"Fajr": "05:01"}))
        assert cache.load("Cairo")["data"]["timings"] == {"Fajr": "05:01"}

    def test_save_creates_missing_directories(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path / "nested" / "dir")
        cache.save("Cairo", _valid_snapshot())
        assert cache.path_for("Cairo").exists()


class TestFileCacheFailures:
    def test_invalid_json_is_corrupt(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        cache.path_for("Cairo").write_text("{not-json", encoding="utf-8")
        with pytest.raises(CacheCorruptError) as info:
            cache.load("Cairo")
        assert info.value.key == "Cairo"

    def test_non_object_json_is_corrupt(self, tmp_path: Path) -> None:
        cache = FileSnapshotCache(tmp_path)
        cache.path_for("Cairo").write_text(json.dumps(["05:00"]), encoding="utf-8")
        with pytest.raises(CacheCorruptError):
            cache.load("Cairo")

    def test_missing_file_is_corrupt_on_load(self, tmp_path: Path) -> None:
        with pytest.raises(CacheCorruptError):
            FileSnapshotCache(tmp_path).load("Cairo")

    def test_unwritable_directory_raises_write_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        cache = FileSnapshotCache(blocker / "cache")
        with pytest.raises(CacheWriteError) as info:
            cache.save("Cairo", _valid_snapshot())
        assert info.value.key == "Cairo"


# ── Memory Cache ─────────────────────────────────────────────────────────────


class TestMemoryCache:
    def test_round_trip(self) -> None:
        cache = MemorySnapshotCache()
        cache.save("Cairo", _valid_snapshot())
        assert cache.load("Cairo") == _valid_snapshot()
        assert len(cache) == 1

    def test_saved_record_is_fresh(self) -> None:
        cache = MemorySnapshotCache()
        cache.save("Cairo", _valid_snapshot())
        assert cache.is_fresh("Cairo", _WINDOW)

    def test_old_record_is_stale(self) -> None:
        cache = MemorySnapshotCache()
        cache.put("Cairo", _valid_snapshot(), datetime.now(timezone.utc) - timedelta(hours=4))
        assert not cache.is_fresh("Cairo", _WINDOW)

    def test_unknown_key(self) -> None:
        cache = MemorySnapshotCache()
        assert not cache.is_fresh("Cairo", _WINDOW)
        with pytest.raises(CacheCorruptError):
            cache.load("Cairo")

    def test_loaded_copy_is_independent(self) -> None:
        cache = MemorySnapshotCache()
        cache.save("Cairo", _valid_snapshot())
        loaded = cache.load("Cairo")
        loaded["data"]["timings"].clear()
        assert cache.load("Cairo")["data"]["timings"]
