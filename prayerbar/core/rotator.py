"""Chronological rotation: locating "now" among today's events.

Algorithm:
    1. Append the sentinel ("Current_time", now) to the events.
    2. Stable-sort ascending by instant.  On an exact tie the sentinel,
       appended last, sorts after the event.
    3. Rotate left by one: the earliest element moves to the end.
       All events carry today's date, so after the last event of the day
       the next one is really tomorrow's first.  Moving the earliest
       element to the back makes the sequence read as a circle starting
       just after it.
    4. The next event is the sentinel's successor, indexed modulo the
       sequence length.  A sentinel in last position wraps to the first
       element.

Pure functions only.  No clock access, no I/O.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel

from prayerbar.domain.instant import NamedInstant


class RotationBoundsError(Exception):
    """The sequence does not hold exactly one sentinel plus at least one event."""


class RotatedSequence(BaseModel):
    """Events in rotated chronological order, with the sentinel in place."""

    instants: tuple[NamedInstant, ...]

    model_config = {"frozen": True}

    @property
    def sentinel_index(self) -> int:
        positions = [i for i, inst in enumerate(self.instants) if inst.is_sentinel]
        if len(positions) != 1:
            raise RotationBoundsError(f"expected exactly one sentinel, found {len(positions)}")
        return positions[0]

    @property
    def next_event(self) -> NamedInstant:
        """The event immediately after "now", wrapping circularly."""
        index = self.sentinel_index
        if len(self.instants) < 2:
            raise RotationBoundsError("no event besides the sentinel")
        return self.instants[(index + 1) % len(self.instants)]

    @property
    def events(self) -> list[NamedInstant]:
        """Non-sentinel instants in rotated order (tooltip order)."""
        return [inst for inst in self.instants if not inst.is_sentinel]

    def __len__(self) -> int:
        return len(self.instants)


def rotate(events: Sequence[NamedInstant], now: datetime) -> RotatedSequence:
    """Insert the sentinel for *now*, sort, and rotate left by one.

    Raises:
        RotationBoundsError: *events* is empty or already holds a sentinel.
    """
    if not events:
        raise RotationBoundsError("cannot rotate an empty event set")
    if any(e.is_sentinel for e in events):
        raise RotationBoundsError("events already contain a sentinel")

    ordered = sorted([*events, NamedInstant.sentinel(now)], key=lambda inst: inst.at)
    return RotatedSequence(instants=tuple(ordered[1:] + ordered[:1]))
