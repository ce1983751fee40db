"""Data models for CLI Wrapped.

This module contains all dataclasses used throughout the package:
- Shell: The supported history dialects
- HistoryEntry, ParsedHistory: Parsed shell history
- CommandCount, TimePattern, DayPattern, HeatmapCell: Usage facets
- Struggle, GitStats, PackageManagerStats, PackageManagerLoyalty: Habit facets
- ActiveDate, DateRange: Calendar facets
- AnalysisResult: The aggregate report handed to presentation code

Everything here is frozen. An AnalysisResult is built once by
analyze_history() and only ever read afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .constants import DEFAULT_PEAK_DAY


class Shell(str, Enum):
    """Supported shells. Declaration order is the loader's probe order."""

    ZSH = "zsh"
    BASH = "bash"
    FISH = "fish"


@dataclass(frozen=True)
class HistoryEntry:
    """A single command the user ran.

    Attributes:
        command: Full command text (may span several lines)
        timestamp: When the command ran, or None if the source had no time
        raw_line: The unparsed source text for this entry

    Example:
        >>> entry = HistoryEntry(command="ls -la", timestamp=None, raw_line="ls -la")
        >>> entry.command
        'ls -la'
    """

    command: str
    timestamp: Optional[datetime] = None
    raw_line: str = ""


@dataclass(frozen=True)
class ParsedHistory:
    """All entries loaded from one shell's history.

    Attributes:
        entries: Entries in source order
        shell: Dialect the entries were parsed with
        file_path: Source file, or a "(merged)" marker for zsh session merges
    """

    entries: Tuple[HistoryEntry, ...]
    shell: Shell
    file_path: str

    @property
    def entry_count(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class CommandCount:
    """A base command and how often it was used."""

    command: str
    count: int
    percentage: float


@dataclass(frozen=True)
class TimePattern:
    """Commands run during one local hour of the day (0-23)."""

    hour: int
    count: int


@dataclass(frozen=True)
class DayPattern:
    """Commands run on one local day of the week.

    Attributes:
        day: 0 = Sunday, 6 = Saturday
        day_name: English day name
        count: Number of timestamped commands on that day
    """

    day: int
    day_name: str
    count: int


@dataclass(frozen=True)
class HeatmapCell:
    """Joint hour/day count for the activity heatmap."""

    hour: int
    day: int
    count: int


@dataclass(frozen=True)
class Struggle:
    """A detected sign of friction at the prompt.

    Attributes:
        type: One of "rage-sudo", "typo", "man-page-check", "repeated-failure"
        description: Human-readable summary (never contains command arguments)
        count: Number of occurrences
    """

    type: str
    description: str
    count: int


@dataclass(frozen=True)
class GitStats:
    """Git habits derived from git and git-alias commands.

    Attributes:
        total_commits: Commit invocations
        total_pushes: Push invocations
        total_pulls: Pull invocations
        branches: Branch creation/switching invocations
        merges: Merge invocations
        rebases: Rebase invocations
        stashes: Stash invocations
        most_used_git_command: Most frequent subcommand or alias
    """

    total_commits: int
    total_pushes: int
    total_pulls: int
    branches: int
    merges: int
    rebases: int
    stashes: int
    most_used_git_command: str


@dataclass(frozen=True)
class PackageManagerStats:
    """Invocations of one package manager.

    The percentage is relative to all detected package-manager invocations,
    not to the total number of commands.
    """

    manager: str
    count: int
    percentage: float


@dataclass(frozen=True)
class PackageManagerLoyalty:
    """Whether one package manager dominates the user's installs."""

    is_loyal: bool
    manager: Optional[str]
    percentage: float


@dataclass(frozen=True)
class ActiveDate:
    """The calendar date (UTC, YYYY-MM-DD) with the most commands."""

    date: str
    count: int


@dataclass(frozen=True)
class DateRange:
    """Earliest and latest timestamps seen in the analysed entries."""

    start: datetime
    end: datetime

    @property
    def days(self) -> int:
        """Inclusive number of calendar days covered."""
        return (self.end.date() - self.start.date()).days + 1


@dataclass(frozen=True)
class AnalysisResult:
    """Aggregate usage report for one history.

    Holds only derived numbers and base command names; no raw command
    lines are retained. Only the length of the longest command is kept.

    Attributes:
        total_commands: Number of analysed entries
        unique_commands: Distinct trimmed command lines
        top_commands: Most used base commands with share of total_commands
        time_patterns: 24 hourly buckets
        day_patterns: 7 daily buckets, Sunday first
        hourly_heatmap: 168 cells, day-major (Sunday 00:00 first)
        peak_hour: Busiest hour (0 when there are no timestamps)
        peak_day: Busiest day name ("Monday" when there are no timestamps)
        struggles: All detected struggles, highest count first
        git_stats: Git habits, or None without git commands
        package_managers: Package manager usage, highest count first
        longest_command_length: Characters in the longest command
        most_active_date: Busiest date, or None without timestamps
        date_range: Timestamp span, or None without timestamps

    Properties:
        package_manager_loyalty: Loyalty verdict for the top package manager
        primary_package_manager: Name of the most used package manager
    """

    total_commands: int
    unique_commands: int
    top_commands: Tuple[CommandCount, ...] = field(default_factory=tuple)
    time_patterns: Tuple[TimePattern, ...] = field(default_factory=tuple)
    day_patterns: Tuple[DayPattern, ...] = field(default_factory=tuple)
    hourly_heatmap: Tuple[HeatmapCell, ...] = field(default_factory=tuple)
    peak_hour: int = 0
    peak_day: str = DEFAULT_PEAK_DAY
    struggles: Tuple[Struggle, ...] = field(default_factory=tuple)
    git_stats: Optional[GitStats] = None
    package_managers: Tuple[PackageManagerStats, ...] = field(default_factory=tuple)
    longest_command_length: int = 0
    most_active_date: Optional[ActiveDate] = None
    date_range: Optional[DateRange] = None

    @property
    def primary_package_manager(self) -> Optional[str]:
        from .package_managers import get_primary_package_manager

        return get_primary_package_manager(self.package_managers)

    @property
    def package_manager_loyalty(self) -> PackageManagerLoyalty:
        """Loyalty verdict for the most used package manager."""
        # Local import to avoid a cycle with package_managers.py
        from .package_managers import detect_package_manager_loyalty

        return detect_package_manager_loyalty(self.package_managers)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        result: Dict[str, Any] = {
            "total_commands": self.total_commands,
            "unique_commands": self.unique_commands,
            "top_commands": [
                {"command": c.command, "count": c.count, "percentage": c.percentage}
                for c in self.top_commands
            ],
            "time_patterns": [
                {"hour": t.hour, "count": t.count} for t in self.time_patterns
            ],
            "day_patterns": [
                {"day": d.day, "day_name": d.day_name, "count": d.count}
                for d in self.day_patterns
            ],
            "hourly_heatmap": [
                {"hour": c.hour, "day": c.day, "count": c.count}
                for c in self.hourly_heatmap
            ],
            "peak_hour": self.peak_hour,
            "peak_day": self.peak_day,
            "struggles": [
                {"type": s.type, "description": s.description, "count": s.count}
                for s in self.struggles
            ],
            "git_stats": None,
            "package_managers": [
                {"manager": p.manager, "count": p.count, "percentage": p.percentage}
                for p in self.package_managers
            ],
            "longest_command_length": self.longest_command_length,
            "most_active_date": None,
            "date_range": None,
        }
        if self.git_stats:
            g = self.git_stats
            result["git_stats"] = {
                "total_commits": g.total_commits,
                "total_pushes": g.total_pushes,
                "total_pulls": g.total_pulls,
                "branches": g.branches,
                "merges": g.merges,
                "rebases": g.rebases,
                "stashes": g.stashes,
                "most_used_git_command": g.most_used_git_command,
            }
        if self.most_active_date:
            result["most_active_date"] = {
                "date": self.most_active_date.date,
                "count": self.most_active_date.count,
            }
        if self.date_range:
            result["date_range"] = {
                "start": self.date_range.start.isoformat(),
                "end": self.date_range.end.isoformat(),
            }
        return result
