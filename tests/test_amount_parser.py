"""Tests for amount parsing and formatting."""

from decimal import Decimal

import pytest

from agencyledger.utils.amount_parser import (
    format_amount,
    parse_amount,
    percent_of,
    round_half_up,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1500", 150000),
        ("1234.56", 123456),
        ("1234,56", 123456),
        ("R$ 1.234,56", 123456),
        ("1,234.56", 123456),
        ("10.000,00", 1000000),
        ("0,005", 1),
        ("12.5", 1250),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1.500", 150000),
        ("R$ 1.500", 150000),
        ("1.234.567", 123456700),
        ("-2.000", -200000),
    ],
)
def test_dot_grouping_is_thousands(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "R$", "0.500", "1.50.000"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_format_amount():
    assert format_amount(123456) == "R$ 1.234,56"
    assert format_amount(5) == "R$ 0,05"
    assert format_amount(-1000000) == "-R$ 10.000,00"


def test_round_half_up():
    assert round_half_up(Decimal("0.5")) == 1
    assert round_half_up(Decimal("2.5")) == 3
    assert round_half_up(Decimal("2.49")) == 2
    assert round_half_up(Decimal("-0.5")) == -1


def test_percent_of():
    assert percent_of(75000, 100000) == 75.0
    assert percent_of(1, 3) == 33.33
    assert percent_of(2, 3) == 66.67
    assert percent_of(Decimal("999.5"), 1000) == 99.95
    assert percent_of(-50000, 100000) == -50.0


def test_percent_of_without_base_is_zero():
    assert percent_of(100, 0) == 0.0
    assert percent_of(100, -10) == 0.0
