"""Event extraction: the one typed boundary over the raw snapshot.

Everything downstream works with NamedInstant and CalendarDescriptor.
No other module reaches into the snapshot's nested dictionaries.

Rules:
    1. Keys outside the recognised set are ignored, never rejected.
    2. Times are ``HH:MM`` on *now*'s local date with *now*'s UTC offset.
    3. Missing structure (no ``data.timings``, no calendar block) raises
       MissingFieldError.  The timing service answers this way for an
       unknown city or country, so it is not a programming error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from prayerbar.domain.enums import CalendarKind, Language
from prayerbar.domain.instant import NamedInstant
from prayerbar.domain.snapshot import CalendarDescriptor, DaySnapshot

logger = logging.getLogger(__name__)


class SnapshotFormatError(Exception):
    """Base for snapshots that cannot be turned into events."""


class MissingFieldError(SnapshotFormatError):
    """Raised when a required field is absent from the snapshot."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"snapshot is missing '{field}'")


class MalformedTimingError(SnapshotFormatError):
    """Raised when a recognised event's time is not ``HH:MM``."""

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self.value = value
        super().__init__(f"cannot parse time {value!r} for '{name}'")


def _mapping_at(snapshot: Mapping[str, Any], *path: str) -> Mapping[str, Any]:
    node: Any = snapshot
    for depth, key in enumerate(path, start=1):
        if not isinstance(node, Mapping) or key not in node:
            raise MissingFieldError(".".join(path[:depth]))
        node = node[key]
    if not isinstance(node, Mapping):
        raise MissingFieldError(".".join(path))
    return node


def _string_at(node: Mapping[str, Any], dotted: str, *path: str) -> str:
    value: Any = node
    for key in path:
        if not isinstance(value, Mapping) or key not in value:
            raise MissingFieldError(f"{dotted}.{'.'.join(path)}")
        value = value[key]
    if not isinstance(value, str) or not value.strip():
        raise MissingFieldError(f"{dotted}.{'.'.join(path)}")
    return value


def parse_clock_time(name: str, value: Any, now: datetime) -> datetime:
    """Combine an ``HH:MM`` string with *now*'s date and UTC offset."""
    if not isinstance(value, str):
        raise MalformedTimingError(name, value)
    try:
        clock = datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError as exc:
        raise MalformedTimingError(name, value) from exc
    return datetime.combine(now.date(), clock, tzinfo=now.tzinfo)


def extract_events(
    snapshot: DaySnapshot,
    recognized_names: Iterable[str],
    now: datetime,
) -> list[NamedInstant]:
    """Turn ``data.timings`` into today's NamedInstants, in snapshot order.

    Raises:
        MissingFieldError: No timings mapping, or no recognised event in it.
        MalformedTimingError: A recognised event has an unparseable time.
    """
    if now.tzinfo is None:
        raise ValueError("now must be timezone-aware")

    timings = _mapping_at(snapshot, "data", "timings")
    allowed = set(recognized_names)

    events: list[NamedInstant] = []
    skipped: list[str] = []
    for name, value in timings.items():
        if name not in allowed:
            skipped.append(name)
            continue
        events.append(NamedInstant(name=name, at=parse_clock_time(name, value, now)))

    if skipped:
        logger.debug("Ignoring unrecognised timings: %s", ", ".join(skipped))
    if not events:
        raise MissingFieldError("data.timings (no recognised events)")
    return events


def extract_calendar(
    snapshot: DaySnapshot,
    calendar: CalendarKind,
    language: Language,
) -> CalendarDescriptor:
    """Read ``data.date.<calendar>`` labels in *language*.

    Raises:
        MissingFieldError: The date, month or weekday label is absent.
    """
    dotted = f"data.date.{calendar.value}"
    block = _mapping_at(snapshot, "data", "date", calendar.value)
    return CalendarDescriptor(
        date=_string_at(block, dotted, "date"),
        month=_string_at(block, dotted, "month", language.value),
        weekday=_string_at(block, dotted, "weekday", language.value),
    )
