"""Utility functions for time handling and text cleanup."""

from .text import clean_name, generate_id, strip_surrounding_quotes
from .timestamps import ensure_utc, format_letter_date, format_timestamp, utc_now

__all__ = [
    # Timestamps
    "utc_now",
    "ensure_utc",
    "format_timestamp",
    "format_letter_date",
    # Text
    "generate_id",
    "clean_name",
    "strip_surrounding_quotes",
]
