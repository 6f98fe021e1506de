"""The fixed working-hours window and the duration arithmetic built on it.

Everything here is a pure function of its arguments. Callers decide whether a
difference is applicable (late, overtime); these helpers only measure it.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

WORK_START = time(9, 0, 0)
WORK_END = time(17, 0, 0)


def at_work_start(day: date) -> datetime:
    return datetime.combine(day, WORK_START)


def at_work_end(day: date) -> datetime:
    return datetime.combine(day, WORK_END)


def format_duration(delta: timedelta) -> str:
    """Render a duration as HH:MM:SS (hours are not wrapped at 24)."""
    total_seconds = int(abs(delta).total_seconds())
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def elapsed_since(reference: datetime, moment: datetime) -> str:
    """Magnitude of the gap between two instants, as HH:MM:SS."""
    return format_duration(moment - reference)


def minutes_between(a: datetime, b: datetime) -> int:
    """Whole minutes between two instants, truncated and never negative."""
    return int(abs(a - b).total_seconds()) // 60
