"""Resolve worked time into canonical decimal hours.

Worked time arrives either as a start/end clock pair or as a duration typed
directly into the form, as decimal hours ("8.5") or clock text ("8:30").
A complete start/end pair always takes precedence over the typed duration.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal

from utils import parse_decimal, parse_int

REFERENCE_DATE = date(2000, 1, 1)
MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class DurationResolution:
    hours: Decimal
    from_clock: bool = False
    # New text for the duration field, or None when it already holds it
    display_text: str | None = None


def parse_time_of_day(val: str | None) -> time | None:
    """Parse HH:MM (or HH:MM:SS) to a time object."""
    if not val:
        return None
    val = val.strip()
    if not val:
        return None
    try:
        parts = val.split(":")
        if len(parts) not in (2, 3):
            return None
        return time(int(parts[0]), int(parts[1]))
    except (ValueError, IndexError):
        return None


def elapsed_hours(start: time, end: time) -> Decimal:
    """Hours from start to end, wrapping past midnight for overnight shifts."""
    start_dt = datetime.combine(REFERENCE_DATE, start.replace(second=0, microsecond=0))
    end_dt = datetime.combine(REFERENCE_DATE, end.replace(second=0, microsecond=0))
    minutes = int((end_dt - start_dt).total_seconds() // 60)
    if minutes < 0:
        minutes += MINUTES_PER_DAY
    return Decimal(minutes) / Decimal(60)


def clock_text_to_hours(val: str) -> Decimal:
    """Convert H:MM text to decimal hours. Missing or bad parts count as zero."""
    parts = val.split(":")
    hours = parse_int(parts[0])
    minutes = parse_int(parts[1]) if len(parts) > 1 else 0
    return Decimal(hours) + Decimal(minutes) / Decimal(60)


def hours_to_clock_text(hours: Decimal) -> str:
    """Convert decimal hours to H:MM text, carrying 60 minutes into the hour."""
    if hours <= 0:
        hours = Decimal("0")
    whole = hours.to_integral_value(rounding=ROUND_FLOOR)
    minutes = ((hours - whole) * 60).to_integral_value(rounding=ROUND_HALF_UP)
    if minutes >= 60:
        whole += 1
        minutes -= 60
    return f"{whole:f}:{int(minutes):02d}"


def parse_duration_text(val: str | None) -> Decimal:
    """Parse a typed duration, either clock text or decimal hours."""
    if not val:
        return Decimal("0")
    if ":" in val:
        hours = clock_text_to_hours(val)
    else:
        hours = parse_decimal(val)
    return max(hours, Decimal("0"))


def resolve_duration(start_text: str | None, end_text: str | None,
                     duration_text: str | None) -> DurationResolution:
    """Work out canonical hours from the current form values."""
    start = parse_time_of_day(start_text)
    end = parse_time_of_day(end_text)

    if start is not None and end is not None:
        hours = elapsed_hours(start, end)
        display = hours_to_clock_text(hours)
        if display == (duration_text or ""):
            display = None
        return DurationResolution(hours=hours, from_clock=True, display_text=display)

    return DurationResolution(hours=parse_duration_text(duration_text))
