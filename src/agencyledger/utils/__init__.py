"""Utility functions for agencyledger."""

from agencyledger.utils.date_parser import parse_date, parse_iso_date, get_date_range
from agencyledger.utils.amount_parser import parse_amount, format_amount, round_half_up, percent_of

__all__ = ["parse_date", "parse_iso_date", "get_date_range", "parse_amount", "format_amount", "round_half_up", "percent_of"]
