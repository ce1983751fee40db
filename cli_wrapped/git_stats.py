"""Git habit analysis for CLI Wrapped."""

import re
from typing import Dict, Optional, Sequence

from .constants import DEFAULT_GIT_COMMAND, GIT_ALIASES, GIT_PATTERNS
from .models import GitStats, HistoryEntry

_CATEGORY_PATTERNS = {name: re.compile(pattern, re.ASCII) for name, pattern in GIT_PATTERNS.items()}


def _first_word(cmd: str) -> str:
    parts = cmd.split()
    return parts[0] if parts else ""


def is_git_command(command: str) -> bool:
    """True for "git ..." lines and lines starting with a known git alias."""
    trimmed = command.strip()
    if trimmed.startswith("git ") or trimmed == "git":
        return True
    return _first_word(trimmed) in GIT_ALIASES


def analyze_git_stats(entries: Sequence[HistoryEntry]) -> Optional[GitStats]:
    """Summarise git usage.

    Every category pattern is tested on its own, so one command line can
    count toward several categories. Subcommands are tallied by their name
    for "git <sub>" lines and by the alias itself for alias lines.

    Args:
        entries: History entries

    Returns:
        GitStats, or None if no git-related command was found

    Example:
        >>> analyze_git_stats([HistoryEntry("git commit -m wip")]).total_commits
        1
    """
    git_commands = [e.command.strip() for e in entries if is_git_command(e.command)]
    if not git_commands:
        return None

    category_counts = {name: 0 for name in _CATEGORY_PATTERNS}
    subcommand_counts: Dict[str, int] = {}

    for cmd in git_commands:
        for name, pattern in _CATEGORY_PATTERNS.items():
            if pattern.search(cmd):
                category_counts[name] += 1

        parts = cmd.split()
        first = parts[0] if parts else ""
        if first == "git":
            key = parts[1] if len(parts) > 1 else "unknown"
        elif first in GIT_ALIASES:
            key = first
        else:
            continue
        subcommand_counts[key] = subcommand_counts.get(key, 0) + 1

    most_used = DEFAULT_GIT_COMMAND
    most_used_count = 0
    for sub, count in subcommand_counts.items():
        if count > most_used_count:
            most_used = sub
            most_used_count = count

    return GitStats(
        total_commits=category_counts["commit"],
        total_pushes=category_counts["push"],
        total_pulls=category_counts["pull"],
        branches=category_counts["branch"],
        merges=category_counts["merge"],
        rebases=category_counts["rebase"],
        stashes=category_counts["stash"],
        most_used_git_command=most_used,
    )
