"""Tests for date parser with relative dates."""

import pytest
from datetime import date, datetime, timedelta
from dateutil.relativedelta import relativedelta
from agencyledger.utils.date_parser import (
    get_date_range,
    one_year_after,
    parse_date,
    parse_iso_date,
)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    result = parse_date("today")
    assert result == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    result = parse_date("yesterday")
    assert result == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    """Test parsing 'tomorrow'."""
    result = parse_date("tomorrow")
    assert result == date.today() + timedelta(days=1)


def test_parse_last_month():
    """Test parsing 'last month'."""
    result = parse_date("last month")
    # Should be first day of last month
    today = date.today()
    if today.month == 1:
        expected = date(today.year - 1, 12, 1)
    else:
        expected = date(today.year, today.month - 1, 1)
    assert result == expected


def test_parse_this_month():
    """Test parsing 'this month'."""
    result = parse_date("this month")
    today = date.today()
    assert result == date(today.year, today.month, 1)


def test_parse_next_month():
    """Test parsing 'next month'."""
    result = parse_date("next month")
    expected = (date.today() + relativedelta(months=1)).replace(day=1)
    assert result == expected


def test_parse_this_year():
    """Test parsing 'this year'."""
    result = parse_date("this year")
    today = date.today()
    assert result == date(today.year, 1, 1)


def test_parse_last_year():
    """Test parsing 'last year'."""
    result = parse_date("last year")
    today = date.today()
    assert result == date(today.year - 1, 1, 1)


def test_parse_invalid_relative():
    """Test parsing invalid relative date."""
    with pytest.raises(ValueError):
        parse_date("last invalid")


def test_parse_standard_formats():
    """Test parsing various standard date formats."""
    # These should all work via dateutil parser
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    # Day first, as Brazilian dates are written
    assert parse_date("15/01/2024") == date(2024, 1, 15)
    assert parse_date("05/03/2024") == date(2024, 3, 5)


def test_parse_iso_date_is_strict():
    """Ledger fields only accept YYYY-MM-DD."""
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
    assert parse_iso_date(" 2024-02-29 ") == date(2024, 2, 29)
    for value in ("15/01/2024", "2024-1-5", "today", "2023-02-29", 20240101):
        with pytest.raises(ValueError):
            parse_iso_date(value)


def test_parse_iso_date_passes_dates_through():
    assert parse_iso_date(date(2024, 1, 15)) == date(2024, 1, 15)
    assert parse_iso_date(datetime(2024, 1, 15, 10, 30)) == date(2024, 1, 15)


def test_one_year_after():
    assert one_year_after(date(2024, 6, 1)) == date(2025, 6, 1)
    assert one_year_after(date(2024, 2, 29)) == date(2025, 2, 28)


def test_get_date_range_this_month():
    """Test get_date_range for this-month."""
    start, end = get_date_range("this-month", today=date(2024, 2, 10))
    assert start == date(2024, 2, 1)
    assert end == date(2024, 2, 29)


def test_get_date_range_this_year():
    """Test get_date_range for this-year."""
    start, end = get_date_range("this-year", today=date(2024, 6, 15))
    assert start == date(2024, 1, 1)
    assert end == date(2024, 12, 31)


def test_get_date_range_last_month():
    """Test get_date_range for last-month."""
    today = date.today()
    start, end = get_date_range("last-month")
    # First day of last month
    expected_start = (today - relativedelta(months=1)).replace(day=1)
    # Last day of last month (day before first day of current month)
    expected_end = today.replace(day=1) - timedelta(days=1)
    assert start == expected_start
    assert end == expected_end
    # Verify end is the last day of last month
    assert end.month == expected_start.month
    assert end.year == expected_start.year


def test_get_date_range_last_year():
    """Test get_date_range for last-year."""
    today = date.today()
    start, end = get_date_range("last-year")
    assert start == date(today.year - 1, 1, 1)
    assert end == date(today.year - 1, 12, 31)


def test_get_date_range_invalid_period():
    """Test get_date_range with invalid period."""
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("invalid-period")


def test_get_date_range_edge_case_year_boundary():
    """Test last-month when the reference date is in January."""
    start, end = get_date_range("last-month", today=date(2024, 1, 20))
    assert start == date(2023, 12, 1)
    assert end == date(2023, 12, 31)
