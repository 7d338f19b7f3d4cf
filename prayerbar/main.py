"""prayerbar: next prayer time for Waybar-style status bars.

This is the application entry point.  It parses the command line, wires
the snapshot cache, timing source and presenter together, runs the
pipeline once and prints ``{"text": ..., "tooltip": ...}`` on stdout.
Diagnostics go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys

from prayerbar.adapters.aladhan import AlAdhanTimingSource
from prayerbar.config import LOG_LEVELS, Settings, load_settings
from prayerbar.core.pipeline import PrayerBarPipeline
from prayerbar.core.retry import RetryPolicy
from prayerbar.domain.enums import CalendarKind, Language
from prayerbar.store.file_cache import FileSnapshotCache


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prayerbar",
        description="Print the next prayer time as status-bar JSON",
    )
    parser.add_argument("--city", help="pass a city")
    parser.add_argument("--country", help="pass a country")
    parser.add_argument(
        "--method",
        help="pass a calculation method See https://aladhan.com/calculation-methods",
    )
    language = parser.add_mutually_exclusive_group()
    language.add_argument(
        "--language",
        choices=[lang.value for lang in Language],
        help="language of calendar labels and tooltip header",
    )
    language.add_argument(
        "--ar",
        action="store_const",
        const=Language.AR.value,
        dest="language",
        help="display calendar in Arabic format",
    )
    parser.add_argument(
        "--calendar",
        choices=[c.value for c in CalendarKind],
        help="calendar shown in the tooltip",
    )
    parser.add_argument("--cache-dir", dest="cache_dir", help="directory for cached responses")
    parser.add_argument(
        "--freshness-minutes",
        dest="freshness_window_minutes",
        type=int,
        help="reuse a cached response younger than this",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="stderr log level",
    )
    return parser


def build_pipeline(settings: Settings) -> PrayerBarPipeline:
    source = AlAdhanTimingSource(
        base_url=settings.api_base_url,
        timeout=settings.fetch_timeout_seconds,
        policy=RetryPolicy(
            max_attempts=settings.fetch_max_attempts,
            base_delay=settings.fetch_base_delay_ms / 1000.0,
        ),
    )
    return PrayerBarPipeline(
        settings=settings,
        cache=FileSnapshotCache(settings.cache_dir),
        source=source,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(**vars(args))

    # ── Logging ──────────────────────────────────────────────────────────
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        stream=sys.stderr,
    )

    output = build_pipeline(settings).run()
    print(output.to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
