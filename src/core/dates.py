"""Run-date helpers.

The feed takes an RFC 3339 timestamp in the image path; the heading message
shows the same day as `dd.mm.yyyy`.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone


def now_utc() -> str:
    return datetime.now(timezone.utc).isoformat()


def day_start_utc(day: date) -> str:
    """Midnight UTC of `day`, RFC 3339."""

    return datetime.combine(day, time(0, 0, 0), tzinfo=timezone.utc).isoformat()


def parse_day(value: str) -> date:
    """Parse `YYYY-MM-DD`; raises ValueError otherwise."""

    return datetime.strptime(value, "%Y-%m-%d").date()


def format_heading_date(value: str) -> str:
    """`2019-12-01T00:00:00+00:00` -> `01.12.2019`."""

    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parsed.strftime("%d.%m.%Y")
