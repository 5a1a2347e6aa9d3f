"""Date parsing and normalization utilities."""

from datetime import date, datetime, timedelta
from typing import Any

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def parse_date(date_str: str) -> date:
    """Parse a user supplied date into a date object.

    Supports ISO and free-form absolute dates ("2024-03-05", "March 5, 2024")
    and a few relative forms: "today", "yesterday", "this month",
    "last month", "this year", "last year", "this week", "last week".
    Relative periods resolve to their first day.

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    relative = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
        "this week": today - timedelta(days=today.weekday()),
        "last week": today - timedelta(days=today.weekday() + 7),
    }
    if text in relative:
        return relative[text]

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of PERIODS

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return today.replace(day=1), today
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "this-week":
        return today - timedelta(days=today.weekday()), today
    if period == "last-month":
        first_of_month = today.replace(day=1)
        return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)
    if period == "last-year":
        first_of_year = today.replace(month=1, day=1)
        return first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1)
    if period == "last-week":
        start = today - timedelta(days=today.weekday() + 7)
        return start, start + timedelta(days=6)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
    )


def date_only(value: Any) -> str:
    """Normalize a date-like value to a calendar-date string.

    ``date``/``datetime`` objects become ``YYYY-MM-DD``; strings keep only the
    part before any ``T`` time separator; empty values become ``""``. Strings
    are never parsed, so malformed input passes through unchanged.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).split("T")[0]
