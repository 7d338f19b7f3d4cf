"""Static label tables for the status-bar output."""

from __future__ import annotations

from prayerbar.domain.enums import Language, PrayerName

# Icon shown before an event name, trailing space included.
PRAYER_ICONS: dict[str, str] = {
    PrayerName.FAJR.value: "\U0001F304 ",
    PrayerName.SUNRISE.value: "\U0001F305 ",
    PrayerName.DHUHR.value: "\U0001F3D9\ufe0f ",
    PrayerName.ASR.value: "\U0001F3D9\ufe0f ",
    PrayerName.MAGHRIB.value: "\U0001F307 ",
    PrayerName.ISHA.value: "\U0001F303 ",
    PrayerName.MIDNIGHT.value: "\U0001F303 ",
}

NEXT_EVENT_ICON = "\U0001F54B "
CALENDAR_ICON = "\U0001F5D3\ufe0f "

HEADER_TEMPLATES: dict[Language, str] = {
    Language.EN: "Prayer times in {location}",
    Language.AR: "مواقيت الصلاة في {location}",
}


def header_for(location: str, language: Language) -> str:
    template = HEADER_TEMPLATES.get(language, HEADER_TEMPLATES[Language.EN])
    return template.format(location=location)
