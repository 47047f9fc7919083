"""Utility helpers for weigh-in."""

from .dates import date_timestamp, format_date_mmddyy, parse_date
from .numbers import extract_number, is_number

__all__ = [
    "date_timestamp",
    "extract_number",
    "format_date_mmddyy",
    "is_number",
    "parse_date",
]
