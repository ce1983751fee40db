"""Utility functions for CLI Wrapped.

This module provides shared helper functions used across the package:
- pluralize(): "1 time" / "3 times" style counts
- format_hour(): 12-hour clock labels
- format_timestamp(): Safe datetime formatting with fallback
- classify(): Threshold-based classification
"""

from datetime import datetime
from typing import Optional

from .constants import DATETIME_FORMAT


def pluralize(count: int, noun: str) -> str:
    """Format a count with a naively pluralised noun.

    Example:
        >>> pluralize(1, "time")
        '1 time'
        >>> pluralize(3, "time")
        '3 times'
    """
    return f"{count} {noun}{'' if count == 1 else 's'}"


def format_hour(hour: int) -> str:
    """Format an hour of the day (0-23) on a 12-hour clock.

    Example:
        >>> format_hour(0)
        '12 AM'
        >>> format_hour(14)
        '2 PM'
    """
    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"
    if hour < 12:
        return f"{hour} AM"
    return f"{hour - 12} PM"


def format_timestamp(dt: Optional[datetime], fmt: str = DATETIME_FORMAT) -> str:
    """Format a datetime in local time, or "unknown" for None.

    Example:
        >>> format_timestamp(None)
        'unknown'
    """
    return dt.astimezone().strftime(fmt) if dt else "unknown"


def classify(value: float, thresholds: list[tuple[float, str]], default: str) -> str:
    """Classify a value into a category based on thresholds.

    Thresholds are checked in order; the first threshold exceeded returns
    the corresponding label.

    Args:
        value: The value to classify
        thresholds: List of (threshold, label) tuples, checked in order
        default: Label to return if no threshold is exceeded

    Returns:
        The label for the matching threshold, or default

    Example:
        >>> classify(25, [(30, "high"), (20, "medium"), (10, "low")], "minimal")
        'medium'
    """
    for threshold, label in thresholds:
        if value > threshold:
            return label
    return default
