"""History file parsers for CLI Wrapped.

One parser per supported shell, each a pure function of the file text:
- parse_zsh_history(): ": <epoch>:<duration>;<command>" extended format
- parse_bash_history(): one command per line, optional "#<epoch>" markers
- parse_fish_history(): "- cmd:" blocks with indented "when:" and "paths:"

Lines that match nothing in a dialect's grammar are dropped. History files
grow organically and are never validated by the shells that write them,
so a partially corrupt file is the normal case.

PARSERS maps each Shell to a ShellParser pairing its parse function with
the function that locates its default history file.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, NamedTuple, Optional

from .config import LoaderConfig
from .constants import BASH_HISTORY_FILE, FISH_HISTORY_FILE, ZSH_HISTORY_FILE
from .models import HistoryEntry, Shell

ZSH_HEADER = re.compile(r"^: (\d+):\d+;(.*)$", re.ASCII)
BASH_TIMESTAMP = re.compile(r"^#(\d+)$", re.ASCII)
FISH_CMD = re.compile(r"^- cmd: (.*)$", re.ASCII)
FISH_WHEN = re.compile(r"^\s+when: (\d+)$", re.ASCII)
FISH_PATHS = re.compile(r"^\s+paths:", re.ASCII)
FISH_PATH_ITEM = re.compile(r"^\s+- ", re.ASCII)


def epoch_to_datetime(value: str) -> Optional[datetime]:
    """Convert a string of epoch seconds to an aware UTC datetime.

    Returns None for values the platform cannot represent.
    """
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


@dataclass
class _PendingEntry:
    """An entry whose text may still grow."""

    command_lines: List[str]
    timestamp: Optional[datetime]
    raw_lines: List[str] = field(default_factory=list)

    def build(self) -> HistoryEntry:
        return HistoryEntry(
            command="\n".join(self.command_lines),
            timestamp=self.timestamp,
            raw_line="\n".join(self.raw_lines),
        )


@dataclass
class _ScanState:
    """Line-scan state shared by the block-structured parsers.

    The scan is either idle (pending is None) or building an entry.
    flush() finalizes the entry under construction; it is called when the
    next entry starts and once more at end of input.
    """

    entries: List[HistoryEntry] = field(default_factory=list)
    pending: Optional[_PendingEntry] = None

    @property
    def building(self) -> bool:
        return self.pending is not None

    def start(self, command: str, timestamp: Optional[datetime], raw: str) -> None:
        self.flush()
        self.pending = _PendingEntry([command], timestamp, [raw])

    def flush(self) -> None:
        if self.pending is not None:
            self.entries.append(self.pending.build())
        self.pending = None


def parse_zsh_history(content: str) -> List[HistoryEntry]:
    """Parse zsh history text.

    Each entry begins with an extended-history header. Any other non-empty
    line continues the previous command (heredocs, backslash continuations).
    Lines seen before the first header are treated as plain one-line
    history without timestamps.

    Args:
        content: Full text of a zsh history file

    Returns:
        Entries in file order

    Example:
        >>> entries = parse_zsh_history(": 1704067200:0;git status")
        >>> entries[0].command
        'git status'
    """
    state = _ScanState()

    for line in content.split("\n"):
        match = ZSH_HEADER.match(line)
        if match:
            state.start(match.group(2), epoch_to_datetime(match.group(1)), line)
        elif not line:
            continue
        elif state.building:
            state.pending.command_lines.append(line)
            state.pending.raw_lines.append(line)
        else:
            state.entries.append(HistoryEntry(command=line, timestamp=None, raw_line=line))

    state.flush()
    return state.entries


def parse_bash_history(content: str) -> List[HistoryEntry]:
    """Parse bash history text.

    One command per line. When HISTTIMEFORMAT is set bash writes a
    "#<epoch>" line before each command; that timestamp applies to the
    next command only. Blank lines are skipped.

    Args:
        content: Full text of a bash history file

    Returns:
        Entries in file order
    """
    entries: List[HistoryEntry] = []
    pending_timestamp: Optional[datetime] = None
    pending_marker = ""

    for line in content.split("\n"):
        if not line:
            continue

        match = BASH_TIMESTAMP.match(line)
        if match:
            pending_timestamp = epoch_to_datetime(match.group(1))
            pending_marker = line
            continue

        raw_line = f"{pending_marker}\n{line}" if pending_marker else line
        entries.append(
            HistoryEntry(command=line, timestamp=pending_timestamp, raw_line=raw_line)
        )
        pending_timestamp = None
        pending_marker = ""

    return entries


def parse_fish_history(content: str) -> List[HistoryEntry]:
    """Parse fish history text.

    Fish stores a YAML-like list:

        - cmd: git status
          when: 1704067200
          paths:
            - /some/path

    "when:" sets the timestamp of the entry being built. "paths:" and its
    items are kept in raw_line but never become part of the command.

    Args:
        content: Full text of a fish_history file

    Returns:
        Entries in file order
    """
    state = _ScanState()

    for line in content.split("\n"):
        match = FISH_CMD.match(line)
        if match:
            state.start(match.group(1), None, line)
            continue

        if not state.building:
            continue

        when = FISH_WHEN.match(line)
        if when:
            state.pending.timestamp = epoch_to_datetime(when.group(1))
            state.pending.raw_lines.append(line)
        elif FISH_PATHS.match(line) or FISH_PATH_ITEM.match(line):
            state.pending.raw_lines.append(line)

    state.flush()
    return state.entries


def zsh_default_path(config: LoaderConfig) -> Path:
    return config.home / ZSH_HISTORY_FILE


def bash_default_path(config: LoaderConfig) -> Path:
    return config.home / BASH_HISTORY_FILE


def fish_default_path(config: LoaderConfig) -> Path:
    return config.data_dir / FISH_HISTORY_FILE


class ShellParser(NamedTuple):
    """Parsing capability for one shell dialect."""

    parse: Callable[[str], List[HistoryEntry]]
    default_path: Callable[[LoaderConfig], Path]


PARSERS: Dict[Shell, ShellParser] = {
    Shell.ZSH: ShellParser(parse_zsh_history, zsh_default_path),
    Shell.BASH: ShellParser(parse_bash_history, bash_default_path),
    Shell.FISH: ShellParser(parse_fish_history, fish_default_path),
}


def get_parser(shell: Shell) -> ShellParser:
    """Look up the parser for a shell.

    Raises:
        ValueError: If shell is not a supported dialect
    """
    try:
        return PARSERS[Shell(shell)]
    except ValueError:
        raise ValueError(
            f"Unsupported shell: {shell!r} (expected one of: "
            f"{', '.join(s.value for s in Shell)})"
        ) from None
