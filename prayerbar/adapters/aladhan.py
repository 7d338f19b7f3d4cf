"""AlAdhanTimingSource: daily timings from api.aladhan.com.

Request:
    GET {base_url}/timingsByCity/{DD-MM-YYYY}?city=...&country=...&method=...

Relevant response fields:
{
    "code": 200,
    "data": {
        "timings": {"Fajr": "05:00", "Sunrise": "06:31", ...},
        "date": {
            "hijri": {"date": "13-04-1447", "month": {"en": "...", "ar": "..."},
                      "weekday": {"en": "...", "ar": "..."}},
            "gregorian": {...}
        }
    }
}

Failures:
    Transport errors, timeouts, 5xx, 408, 429 and undecodable bodies are
    retried.  Any other 4xx raises LocationRejectedError at once; AlAdhan
    answers an unknown city with
    HTTP 400 {"code": 400, "status": "BAD_REQUEST", "data": "Unable to locate city"}.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

import requests

from prayerbar.adapters.base import FetchExhaustedError, LocationRejectedError, TimingSource
from prayerbar.core.retry import RetryExhaustedError, RetryPolicy, run_with_retry
from prayerbar.domain.snapshot import DaySnapshot, Location

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://api.aladhan.com/v1"

# Client statuses worth repeating.  Any other 4xx is a rejection.
_RETRYABLE_CLIENT_STATUSES = frozenset({408, 429})


def _is_rejection(status_code: int) -> bool:
    return 400 <= status_code < 500 and status_code not in _RETRYABLE_CLIENT_STATUSES


def _rejection_detail(response: requests.Response) -> str:
    """Service message from a rejection body, e.g. "Unable to locate city"."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("data"), str):
        return body["data"]
    return (response.text or "").strip()[:200] or f"HTTP {response.status_code}"



class AlAdhanTimingSource(TimingSource):
    """Fetches one day of timings by city, retrying with linear backoff."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
        self._http = session or requests

    @property
    def source_name(self) -> str:
        return "aladhan"

    def endpoint_for(self, day: date) -> str:
        return f"{self._base_url}/timingsByCity/{day.strftime('%d-%m-%Y')}"

    def fetch_day(self, location: Location, method: str, day: date) -> DaySnapshot:
        endpoint = self.endpoint_for(day)
        params = {
            "city": location.city,
            "country": location.country,
            "method": method,
        }
        logger.info("Fetching timings for '%s' on %s", location, day.isoformat())
        logger.debug("GET %s params=%s", endpoint, params)

        def attempt() -> DaySnapshot:
            response = self._http.get(endpoint, params=params, timeout=self._timeout)
            if _is_rejection(response.status_code):
                raise LocationRejectedError(self.source_name, response.status_code, _rejection_detail(response))
            response.raise_for_status()
            payload = response.json()
            if not isinstance(payload, dict):
                raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
            return payload

        retry_kwargs = {"retry_on": (requests.exceptions.RequestException, ValueError)}
        if self._sleep is not None:
            retry_kwargs["sleep"] = self._sleep

        try:
            snapshot = run_with_retry(attempt, self._policy, **retry_kwargs)
        except RetryExhaustedError as exc:
            logger.error("Could not reach %s for '%s': %s", self.source_name, location, exc.last_error)
            raise FetchExhaustedError(self.source_name, exc.attempts, str(exc.last_error)) from exc

        logger.info("Fetched timings for '%s' (code=%s)", location, snapshot.get("code"))
        return snapshot
