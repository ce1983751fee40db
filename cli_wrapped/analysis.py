"""Analysis aggregation for CLI Wrapped.

This module composes the individual analyzers into one report:
- analyze_entries(): Analyze a sequence of history entries
- analyze_history(): Analyze a ParsedHistory

Every analyzer sees the same entries and none sees another's output, so
the order below carries no meaning.
"""

from typing import Sequence

from .commands import count_unique_commands, find_longest_command_length, get_top_commands
from .constants import DEFAULT_TOP_COMMANDS
from .git_stats import analyze_git_stats
from .models import AnalysisResult, HistoryEntry, ParsedHistory
from .package_managers import analyze_package_managers
from .patterns import (
    analyze_day_patterns,
    analyze_time_patterns,
    create_hourly_heatmap,
    find_date_range,
    find_most_active_date,
    find_peak_day,
    find_peak_hour,
)
from .struggles import analyze_struggles


def analyze_entries(
    entries: Sequence[HistoryEntry], top_limit: int = DEFAULT_TOP_COMMANDS
) -> AnalysisResult:
    """Build the aggregate report for a sequence of entries.

    Args:
        entries: History entries (not modified)
        top_limit: Number of top commands to keep

    Returns:
        AnalysisResult
    """
    entries = tuple(entries)
    time_patterns = analyze_time_patterns(entries)
    day_patterns = analyze_day_patterns(entries)

    return AnalysisResult(
        total_commands=len(entries),
        unique_commands=count_unique_commands(entries),
        top_commands=tuple(get_top_commands(entries, top_limit)),
        time_patterns=tuple(time_patterns),
        day_patterns=tuple(day_patterns),
        hourly_heatmap=tuple(create_hourly_heatmap(entries)),
        peak_hour=find_peak_hour(time_patterns),
        peak_day=find_peak_day(day_patterns),
        struggles=tuple(analyze_struggles(entries)),
        git_stats=analyze_git_stats(entries),
        package_managers=tuple(analyze_package_managers(entries)),
        longest_command_length=find_longest_command_length(entries),
        most_active_date=find_most_active_date(entries),
        date_range=find_date_range(entries),
    )


def analyze_history(
    history: ParsedHistory, top_limit: int = DEFAULT_TOP_COMMANDS
) -> AnalysisResult:
    """Run the full analysis on a parsed history.

    Example:
        >>> result = analyze_history(load_history())
        >>> print(f"{result.total_commands} commands, peak hour {result.peak_hour}")
    """
    return analyze_entries(history.entries, top_limit)
