"""BarPresenter: renders a rotated event sequence for the status bar.

Output shape (Waybar custom module):
    text:    "🕋 Asr 15:30"
    tooltip: "<b>Prayer times in Cairo</b>\n\n"
             "🗓️ 13-04-1447 Rabīʿ al-thānī Al Thalaata\n\n"
             "🏙️ Asr at 15:30\n"
             ...

Rendering performs no parsing and cannot fail on validated input.
"""

from __future__ import annotations

from prayerbar.core.rotator import RotatedSequence
from prayerbar.domain.enums import Language
from prayerbar.domain.instant import NamedInstant
from prayerbar.domain.snapshot import CalendarDescriptor
from prayerbar.models.output import BarOutput
from prayerbar.render.labels import CALENDAR_ICON, NEXT_EVENT_ICON, PRAYER_ICONS, header_for


class BarPresenter:
    """Formats the next event and the full day schedule."""

    def __init__(
        self,
        icons: dict[str, str] | None = None,
        language: Language = Language.EN,
        next_event_prefix: str = NEXT_EVENT_ICON,
    ) -> None:
        self._icons = PRAYER_ICONS if icons is None else icons
        self._language = language
        self._next_event_prefix = next_event_prefix

    def render(
        self,
        rotated: RotatedSequence,
        next_event: NamedInstant,
        location_label: str,
        calendar_label: CalendarDescriptor | None = None,
    ) -> BarOutput:
        return BarOutput(
            text=self.format_text(next_event),
            tooltip=self.format_tooltip(rotated, location_label, calendar_label),
        )

    def format_text(self, next_event: NamedInstant) -> str:
        return f"{self._next_event_prefix}{next_event.name} {next_event.clock_time}"

    def format_tooltip(
        self,
        rotated: RotatedSequence,
        location_label: str,
        calendar_label: CalendarDescriptor | None = None,
    ) -> str:
        parts = [f"<b>{header_for(location_label, self._language)}</b>\n\n"]
        if calendar_label is not None:
            parts.append(f"{CALENDAR_ICON}{calendar_label}\n\n")
        for event in rotated.events:
            icon = self._icons.get(event.name, "")
            parts.append(f"{icon}{event.name} at {event.clock_time}\n")
        return "".join(parts)
