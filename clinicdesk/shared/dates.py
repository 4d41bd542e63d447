"""
Calendar-date helpers.

Dates coming from clients are local calendar days. They are built from the
literal year/month/day of the string and never pass through a timezone-aware
parse, so "1990-08-22" is stored as 22 August whatever the server timezone.
"""

from datetime import date, datetime, timedelta
from typing import Annotated, Any, Optional, Tuple

from pydantic import BeforeValidator


# Upper bound for "today or later" range queries
FAR_FUTURE = date(2099, 12, 31)


def parse_local_date(value: str) -> date:
    """Extract the calendar day from "YYYY-MM-DD" (anything after the day is ignored)."""
    try:
        year, month, day = (int(part) for part in value[:10].split("-"))
        return date(year, month, day)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")


def _coerce_local_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return parse_local_date(value)
    return value


# Pydantic field type for client supplied calendar days
LocalDate = Annotated[date, BeforeValidator(_coerce_local_date)]


def week_bounds(day: date) -> Tuple[date, date]:
    """Sunday through Saturday of the week containing ``day``."""
    # date.weekday(): Monday == 0 ... Sunday == 6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def today(now: Optional[datetime] = None) -> date:
    """The local calendar day for ``now`` (defaults to the server clock)."""
    return (now or datetime.now()).date()
