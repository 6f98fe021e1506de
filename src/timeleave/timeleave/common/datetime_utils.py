from __future__ import annotations

from datetime import date, datetime

from ..core.exceptions import ValidationError

# Stored as text in attendance rows, so it must not follow the process locale.
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def parse_iso_date(value: str, field_name: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def month_name(moment: date) -> str:
    """English month name, e.g. "October"."""
    return MONTH_NAMES[moment.month - 1]
