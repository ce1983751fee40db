"""CLI Wrapped - A year-in-review of your shell history.

This package parses zsh, bash and fish history files and derives usage
statistics: top commands, time-of-day patterns, struggles such as typos
and forgotten sudo, and git and package manager habits.

Modules:
    models: Data classes for history entries and analysis results
    constants: Limits, thresholds and rule tables
    config: Environment-derived loader configuration
    parsers: Per-shell history file parsers
    loader: History discovery, loading and year filtering
    commands: Base command classification and frequency
    patterns: Hour, weekday and calendar patterns
    struggles: Typo, rage-sudo, man page and repeat detection
    git_stats: Git habits
    package_managers: Package manager usage
    analysis: Aggregation of every analyzer into one report
    roasts: Local, aggregate-only roasts
    share: Compact share codes
    cli: Command-line interface

Example:
    >>> from cli_wrapped import load_history, analyze_history
    >>> result = analyze_history(load_history())
    >>> for cmd in result.top_commands[:3]:
    ...     print(f"{cmd.command}: {cmd.count}")
"""

__version__ = "0.1.0"

# Re-export commonly used symbols for convenience
from .analysis import analyze_entries, analyze_history
from .commands import (
    count_unique_commands,
    extract_base_command,
    find_longest_command_length,
    get_top_commands,
)
from .config import LoaderConfig
from .git_stats import analyze_git_stats
from .loader import (
    HistoryNotFoundError,
    detect_shell,
    filter_by_year,
    find_history_file,
    load_history,
    parse_history_file,
)
from .models import (
    ActiveDate,
    AnalysisResult,
    CommandCount,
    DateRange,
    DayPattern,
    GitStats,
    HeatmapCell,
    HistoryEntry,
    PackageManagerLoyalty,
    PackageManagerStats,
    ParsedHistory,
    Shell,
    Struggle,
    TimePattern,
)
from .package_managers import analyze_package_managers, detect_package_manager_loyalty
from .parsers import parse_bash_history, parse_fish_history, parse_zsh_history
from .patterns import (
    analyze_day_patterns,
    analyze_time_patterns,
    create_hourly_heatmap,
    find_most_active_date,
    find_peak_day,
    find_peak_hour,
)
from .roasts import Roasts, get_fallback_roasts
from .share import (
    ShareSummary,
    build_share_summary,
    decode_share_summary,
    encode_share_summary,
)
from .struggles import analyze_struggles

__all__ = [
    # Version
    "__version__",
    # Data models
    "Shell",
    "HistoryEntry",
    "ParsedHistory",
    "AnalysisResult",
    "CommandCount",
    "TimePattern",
    "DayPattern",
    "HeatmapCell",
    "Struggle",
    "GitStats",
    "PackageManagerStats",
    "PackageManagerLoyalty",
    "ActiveDate",
    "DateRange",
    "LoaderConfig",
    # Parsing and loading
    "parse_zsh_history",
    "parse_bash_history",
    "parse_fish_history",
    "HistoryNotFoundError",
    "detect_shell",
    "find_history_file",
    "parse_history_file",
    "load_history",
    "filter_by_year",
    # Analyzers
    "extract_base_command",
    "get_top_commands",
    "count_unique_commands",
    "find_longest_command_length",
    "analyze_time_patterns",
    "analyze_day_patterns",
    "create_hourly_heatmap",
    "find_peak_hour",
    "find_peak_day",
    "find_most_active_date",
    "analyze_struggles",
    "analyze_git_stats",
    "analyze_package_managers",
    "detect_package_manager_loyalty",
    "analyze_entries",
    "analyze_history",
    # Presentation helpers
    "Roasts",
    "get_fallback_roasts",
    "ShareSummary",
    "build_share_summary",
    "encode_share_summary",
    "decode_share_summary",
]
