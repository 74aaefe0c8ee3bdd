"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = ("today", "this-week", "this-month", "last-week", "last-month")


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "15 Jan 2024") and relative ones:
    "today", "yesterday", "tomorrow", "this week", "this month",
    "last week", "last month" and "last <weekday>".

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this week": _week_start(today),
        "this month": today.replace(day=1),
        "last week": _week_start(today) - timedelta(days=7),
        "last month": (today - relativedelta(months=1)).replace(day=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    if text.startswith("last ") and text[5:] in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(text[5:])) % 7 or 7
        return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(text, yearfirst=True).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of today, this-week, this-month, last-week, last-month

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "today":
        return (today, today)
    if period == "this-week":
        return (_week_start(today), today)
    if period == "this-month":
        return (today.replace(day=1), today)
    if period == "last-week":
        start = _week_start(today) - timedelta(days=7)
        return (start, start + timedelta(days=6))
    if period == "last-month":
        first_of_month = today.replace(day=1)
        return ((first_of_month - relativedelta(months=1)), first_of_month - timedelta(days=1))

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
