"""Abstract base for timing sources.

A timing source retrieves the raw daily document for one location from a
remote prayer-time service.

Architectural rules:
    1. fetch_day() returns the decoded response untouched (no field mapping).
    2. Transient failures are retried inside the source; the caller only
       ever sees a snapshot, FetchExhaustedError, or LocationRejectedError
       for a request the service refuses outright.
    3. No source may read or write the cache directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from prayerbar.domain.snapshot import DaySnapshot, Location


class FetchExhaustedError(Exception):
    """Raised when the timing service could not be reached within the retry ceiling."""

    def __init__(self, source_name: str, attempts: int, reason: str) -> None:
        self.source_name = source_name
        self.attempts = attempts
        self.reason = reason
        super().__init__(f"{source_name}: gave up after {attempts} attempt(s): {reason}")


class LocationRejectedError(Exception):
    """Raised when the timing service refuses the request itself (HTTP 4xx).

    AlAdhan answers an unknown city or country with HTTP 400.  Repeating
    the same request cannot succeed, so this error is never retried.
    """

    def __init__(self, source_name: str, status_code: int, detail: str) -> None:
        self.source_name = source_name
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{source_name}: request rejected with HTTP {status_code}: {detail}")


class TimingSource(ABC):
    """Base class for remote daily prayer-time providers."""

    @abstractmethod
    def fetch_day(self, location: Location, method: str, day: date) -> DaySnapshot:
        """Fetch the raw snapshot for *location* on *day*.

        Raises:
            FetchExhaustedError: If every attempt failed.
            LocationRejectedError: If the service refused the request.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Human-readable name of the remote service."""
        ...
