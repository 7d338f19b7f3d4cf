"""PrayerBarPipeline: cache, fetch, extract, rotate, render.

Flow:
    1. Fresh cached snapshot?  Load it (a corrupt record falls through to 2).
    2. Otherwise fetch from the timing source and try to cache the result.
       A failed cache write only costs the next run a fetch.
    3. Extract calendar label and events, rotate around "now", render.

Error boundary:
    Failures caused outside the process (network, a rejected location,
    malformed or missing remote data) become BarOutput.degraded() so the
    status bar always receives both fields.  RotationBoundsError is NOT
    caught: it means the extractor let an empty event set through.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from prayerbar.adapters.base import FetchExhaustedError, LocationRejectedError, TimingSource
from prayerbar.config import Settings
from prayerbar.core.extractor import SnapshotFormatError, extract_calendar, extract_events
from prayerbar.core.rotator import rotate
from prayerbar.domain.snapshot import DaySnapshot, Location
from prayerbar.foundation.clock import local_now
from prayerbar.models.output import BarOutput
from prayerbar.render.presenter import BarPresenter
from prayerbar.store.base import CacheCorruptError, CacheWriteError, SnapshotCache

logger = logging.getLogger(__name__)


class PrayerBarPipeline:
    """One run of the status-bar module for a single location.

    Args:
        settings: Location, method, language and cache policy.
        cache: Snapshot store keyed by city.
        source: Remote timing provider.
        presenter: Formatter for the final text and tooltip.
    """

    def __init__(
        self,
        settings: Settings,
        cache: SnapshotCache,
        source: TimingSource,
        presenter: BarPresenter | None = None,
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._source = source
        self._presenter = presenter or BarPresenter(
            language=settings.language,
            next_event_prefix=settings.next_event_prefix,
        )
        self._location = Location(city=settings.city, country=settings.country)
        self._window = timedelta(minutes=settings.freshness_window_minutes)

    @property
    def cache_key(self) -> str:
        return self._settings.city

    # ── Public API ───────────────────────────────────────────────────────

    def run(self, now: datetime | None = None) -> BarOutput:
        """Produce the status-bar output, degrading instead of raising."""
        now = now or local_now()
        try:
            snapshot = self.snapshot_for(now)
        except FetchExhaustedError as exc:
            logger.error("Could not reach the timing service: %s", exc)
            return BarOutput.degraded()
        except LocationRejectedError as exc:
            logger.error(
                "Timing service rejected location '%s' (check --city/--country): %s",
                self._location,
                exc.detail,
            )
            return BarOutput.degraded()

        try:
            return self.render(snapshot, now)
        except SnapshotFormatError as exc:
            logger.error(
                "Timing service returned unusable data for '%s' "
                "(check --city/--country): %s",
                self._location,
                exc,
            )
            return BarOutput.degraded()

    def snapshot_for(self, now: datetime) -> DaySnapshot:
        """Cached snapshot if fresh and readable, otherwise a fresh fetch.

        Raises:
            FetchExhaustedError: The cache was unusable and fetching failed.
            LocationRejectedError: The service refused the city or country.
        """
        key = self.cache_key
        if self._cache.is_fresh(key, self._window):
            try:
                snapshot = self._cache.load(key)
                logger.info("Cache hit for '%s'", key)
                return snapshot
            except CacheCorruptError as exc:
                logger.warning("%s; fetching a fresh copy", exc)
        else:
            logger.info("Cache miss for '%s'", key)

        snapshot = self._source.fetch_day(self._location, self._settings.method, now.date())
        try:
            self._cache.save(key, snapshot)
        except CacheWriteError as exc:
            logger.warning("%s; continuing without cache", exc)
        return snapshot

    def render(self, snapshot: DaySnapshot, now: datetime) -> BarOutput:
        """Extract, rotate and format one snapshot.

        Raises:
            MissingFieldError: Required snapshot fields are absent.
            MalformedTimingError: A recognised time is not ``HH:MM``.
        """
        calendar = extract_calendar(snapshot, self._settings.calendar, self._settings.language)
        events = extract_events(snapshot, self._settings.recognized_events, now)
        rotated = rotate(events, now)
        next_event = rotated.next_event
        logger.debug("Next event: %s", next_event)
        return self._presenter.render(rotated, next_event, self._settings.city, calendar)
