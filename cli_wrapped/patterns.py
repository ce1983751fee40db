"""Temporal pattern analysis for CLI Wrapped.

Hour and weekday buckets use the local time zone; entries without a
timestamp are left out. The most active date is grouped by UTC date.
Naive datetimes are interpreted as local time.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .constants import DAY_NAMES, DEFAULT_PEAK_DAY
from .models import ActiveDate, DateRange, DayPattern, HeatmapCell, HistoryEntry, TimePattern


def _local(ts: datetime) -> datetime:
    return ts.astimezone()


def _day_index(ts: datetime) -> int:
    """Weekday with 0 = Sunday."""
    return (_local(ts).weekday() + 1) % 7


def analyze_time_patterns(entries: Sequence[HistoryEntry]) -> List[TimePattern]:
    """Count timestamped commands per local hour (24 buckets)."""
    hour_counts = [0] * 24
    for entry in entries:
        if entry.timestamp:
            hour_counts[_local(entry.timestamp).hour] += 1
    return [TimePattern(hour=hour, count=count) for hour, count in enumerate(hour_counts)]


def analyze_day_patterns(entries: Sequence[HistoryEntry]) -> List[DayPattern]:
    """Count timestamped commands per local weekday (Sunday first)."""
    day_counts = [0] * 7
    for entry in entries:
        if entry.timestamp:
            day_counts[_day_index(entry.timestamp)] += 1
    return [
        DayPattern(day=day, day_name=DAY_NAMES[day], count=count)
        for day, count in enumerate(day_counts)
    ]


def create_hourly_heatmap(entries: Sequence[HistoryEntry]) -> List[HeatmapCell]:
    """Count commands per (weekday, hour) pair.

    Returns:
        168 cells ordered day-major: Sunday 00:00, Sunday 01:00, ...
    """
    counts = [[0] * 24 for _ in range(7)]
    for entry in entries:
        if entry.timestamp:
            counts[_day_index(entry.timestamp)][_local(entry.timestamp).hour] += 1

    return [
        HeatmapCell(hour=hour, day=day, count=counts[day][hour])
        for day in range(7)
        for hour in range(24)
    ]


def find_peak_hour(patterns: Sequence[TimePattern]) -> int:
    """Busiest hour. The earliest hour wins a tie; 0 if all counts are zero."""
    max_hour = 0
    max_count = 0
    for pattern in patterns:
        if pattern.count > max_count:
            max_count = pattern.count
            max_hour = pattern.hour
    return max_hour


def find_peak_day(patterns: Sequence[DayPattern]) -> str:
    """Busiest day name. Earliest wins a tie; "Monday" if all counts are zero."""
    max_day = DEFAULT_PEAK_DAY
    max_count = 0
    for pattern in patterns:
        if pattern.count > max_count:
            max_count = pattern.count
            max_day = pattern.day_name
    return max_day


def find_most_active_date(entries: Sequence[HistoryEntry]) -> Optional[ActiveDate]:
    """Find the UTC calendar date with the most commands.

    Returns:
        ActiveDate (first date seen wins a tie), or None without timestamps
    """
    date_counts: Dict[str, int] = {}
    for entry in entries:
        if entry.timestamp:
            date_str = entry.timestamp.astimezone(timezone.utc).date().isoformat()
            date_counts[date_str] = date_counts.get(date_str, 0) + 1

    max_date = ""
    max_count = 0
    for date_str, count in date_counts.items():
        if count > max_count:
            max_count = count
            max_date = date_str

    if not max_date:
        return None
    return ActiveDate(date=max_date, count=max_count)


def find_date_range(entries: Sequence[HistoryEntry]) -> Optional[DateRange]:
    """Earliest and latest timestamps, or None without timestamps."""
    timestamps = [e.timestamp for e in entries if e.timestamp]
    if not timestamps:
        return None
    return DateRange(
        start=min(timestamps, key=lambda ts: ts.timestamp()),
        end=max(timestamps, key=lambda ts: ts.timestamp()),
    )
