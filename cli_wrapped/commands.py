"""Command classification and frequency analysis for CLI Wrapped.

This module provides:
- extract_base_command(): Canonical leading token of a command line
- count_commands(): Tally base commands
- get_top_commands(): Most used base commands with percentages
- count_unique_commands(): Distinct command lines
- find_longest_command_length(): Length of the longest command

extract_base_command() is the one place command lines are normalised;
the git and package-manager analyzers rely on the same rules.
"""

from typing import Dict, List, Sequence

from .constants import DEFAULT_TOP_COMMANDS
from .models import CommandCount, HistoryEntry


def extract_base_command(command: str) -> str:
    """Extract the base command from a full command line.

    A "sudo " prefix is kept together with the command it elevates, and
    leading KEY=VALUE environment assignments are skipped.

    Args:
        command: Raw command line

    Returns:
        Base command, or "" for a blank line

    Example:
        >>> extract_base_command("git commit -m 'hello'")
        'git'
        >>> extract_base_command("sudo apt install vim")
        'sudo apt'
        >>> extract_base_command("NODE_ENV=prod node app.js")
        'node'
    """
    trimmed = command.strip()

    if trimmed.startswith("sudo "):
        parts = trimmed[5:].split()
        return f"sudo {parts[0] if parts else ''}".strip()

    parts = trimmed.split()
    for part in parts:
        if "=" not in part:
            return part

    return parts[0] if parts else ""


def count_commands(entries: Sequence[HistoryEntry]) -> Dict[str, int]:
    """Count base command frequencies. Blank commands are not counted."""
    counts: Dict[str, int] = {}
    for entry in entries:
        base = extract_base_command(entry.command)
        if base:
            counts[base] = counts.get(base, 0) + 1
    return counts


def get_top_commands(
    entries: Sequence[HistoryEntry], limit: int = DEFAULT_TOP_COMMANDS
) -> List[CommandCount]:
    """Get the most used base commands.

    Ties keep the order in which commands were first seen. Percentages are
    relative to the total number of entries.

    Args:
        entries: History entries
        limit: Maximum number of commands to return

    Returns:
        CommandCount list, highest count first
    """
    counts = count_commands(entries)
    total = len(entries)
    if total == 0:
        return []

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [
        CommandCount(command=command, count=count, percentage=count / total * 100)
        for command, count in ranked[:limit]
    ]


def count_unique_commands(entries: Sequence[HistoryEntry]) -> int:
    """Count distinct trimmed command lines.

    "git status" and "git log" are two unique commands even though both
    have the base command "git".
    """
    return len({entry.command.strip() for entry in entries})


def find_longest_command_length(entries: Sequence[HistoryEntry]) -> int:
    """Length of the longest command. The command itself is not kept."""
    return max((len(entry.command) for entry in entries), default=0)
