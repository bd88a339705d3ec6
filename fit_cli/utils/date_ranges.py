"""Date parsing, range resolution and bucketing helpers."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

import typer

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_date(value: Optional[str]) -> Optional[str]:
    """Typer callback that validates YYYY-MM-DD format for date options."""
    if value is None:
        return value
    if not _DATE_RE.match(value):
        raise typer.BadParameter(
            f"Invalid date '{value}'. Expected format: YYYY-MM-DD (e.g. 2024-01-15)"
        )
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise typer.BadParameter(
            f"Invalid date '{value}'. Expected format: YYYY-MM-DD (e.g. 2024-01-15)"
        )
    return value


def parse_date(value: str) -> date:
    """Parse YYYY-MM-DD date string."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def month_start(day: date) -> date:
    """First day of the month containing ``day``."""
    return day.replace(day=1)


def iso_weekday(day: date) -> int:
    """Weekday number with Monday=1 .. Sunday=7."""
    return day.isoweekday()


def resolve_date_range(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    last_days: Optional[int] = None,
    this_month: bool = False,
    this_year: bool = False,
    today: Optional[date] = None,
) -> Tuple[Optional[date], Optional[date]]:
    """Resolve CLI date flags into an inclusive range.

    Charts cover the full history unless a flag narrows it, so an open
    bound is returned as ``None``.
    """
    now = today or date.today()

    if start_date or end_date:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
        return start, end

    if last_days:
        return now - timedelta(days=max(last_days - 1, 0)), now

    if this_month:
        start = month_start(now)
        if now.month == 12:
            month_end = date(now.year + 1, 1, 1) - timedelta(days=1)
        else:
            month_end = date(now.year, now.month + 1, 1) - timedelta(days=1)
        return start, month_end

    if this_year:
        return date(now.year, 1, 1), date(now.year, 12, 31)

    return None, None


def in_range(day: date, start: Optional[date], end: Optional[date]) -> bool:
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True
