"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str | date) -> date:
    """Parse a strict ISO date (YYYY-MM-DD).

    Ledger fields only accept this format; relative dates are a CLI convenience
    handled by parse_date.

    Args:
        value: ISO date string, or a date/datetime that is passed through

    Returns:
        Date object

    Raises:
        ValueError: If the value is not a valid ISO calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value.strip()):
        raise ValueError(f"Date '{value}' is not in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise ValueError(f"Could not parse date '{value}': {e}")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)

    if ISO_DATE_PATTERN.match(date_str):
        return parse_iso_date(date_str)

    # Day-first, as Brazilian dates are written (15/01/2024)
    try:
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, this-year, last-month, last-year)
        today: Reference date, defaults to the current date

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        start_date = today.replace(day=1)
        end_date = start_date + relativedelta(months=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today.replace(month=12, day=31))

    elif period == "last-month":
        # First day of last month
        start_date = (today - relativedelta(months=1)).replace(day=1)
        # Last day of last month (day before first day of current month)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, last-month, last-year"
        )


def one_year_after(reference: date) -> date:
    """Return the same calendar day one year later (Feb 29 maps to Feb 28)."""
    return reference + relativedelta(years=1)
