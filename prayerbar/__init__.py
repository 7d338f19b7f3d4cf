"""prayerbar: next prayer time and daily schedule for status bars."""

__version__ = "0.1.0"
