"""History discovery and loading for CLI Wrapped.

This module locates and reads shell history files:
- detect_shell(): Pick a dialect from $SHELL or the platform
- find_history_file(): Probe default locations in preference order
- parse_history_file(): Read and parse one file
- load_zsh_sessions(): Merge macOS per-session zsh history fragments
- load_history(): Resolve, read and parse in one call
- filter_by_year(): Narrow a history to one calendar year

It is read-only and never modifies any files.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .config import LoaderConfig
from .constants import ZSH_HISTORY_MIN_BYTES, ZSH_SESSION_GLOB, ZSH_SESSIONS_DIR
from .models import HistoryEntry, ParsedHistory, Shell
from .parsers import PARSERS, get_parser, parse_zsh_history

logger = logging.getLogger(__name__)

MERGED_SUFFIX = " (merged)"


class HistoryNotFoundError(FileNotFoundError):
    """No readable history file exists at any location that was tried.

    Attributes:
        tried_paths: Every path that was probed, in probe order
    """

    def __init__(self, tried_paths: List[Path]):
        self.tried_paths = list(tried_paths)
        super().__init__(
            "Could not find shell history file. Tried: "
            + ", ".join(str(p) for p in self.tried_paths)
        )


def _read_text(path: Path) -> str:
    # Host default encoding; history files routinely contain stray bytes
    with open(path, "r", errors="replace") as f:
        return f.read()


def detect_shell(config: LoaderConfig) -> Shell:
    """Detect the user's shell.

    Checks $SHELL for zsh, fish, then bash. Falls back to zsh on macOS
    and bash everywhere else.

    Args:
        config: Host configuration

    Returns:
        The detected Shell
    """
    shell = config.shell_env
    if "zsh" in shell:
        return Shell.ZSH
    if "fish" in shell:
        return Shell.FISH
    if "bash" in shell:
        return Shell.BASH
    return Shell.ZSH if config.platform == "darwin" else Shell.BASH


def get_zsh_sessions_dir(config: LoaderConfig) -> Path:
    return config.home / ZSH_SESSIONS_DIR


def list_zsh_session_files(config: LoaderConfig) -> List[Path]:
    """List per-session zsh history fragments, sorted by name."""
    sessions_dir = get_zsh_sessions_dir(config)
    if not sessions_dir.is_dir():
        return []
    return sorted(p for p in sessions_dir.glob(ZSH_SESSION_GLOB) if p.is_file())


def _needs_session_merge(history_file: Path) -> bool:
    """True when ~/.zsh_history is missing or too small to stand alone."""
    try:
        return history_file.stat().st_size < ZSH_HISTORY_MIN_BYTES
    except OSError:
        return True


def merge_entries(entries: List[HistoryEntry]) -> List[HistoryEntry]:
    """Deduplicate on (timestamp, command) and sort chronologically.

    The first occurrence of a duplicate wins. The sort is stable and puts
    entries without a timestamp last.

    Args:
        entries: Entries gathered from several files

    Returns:
        New list of unique entries in timestamp order
    """
    seen = set()
    unique: List[HistoryEntry] = []
    for entry in entries:
        key = (entry.timestamp, entry.command)
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)

    unique.sort(
        key=lambda e: (e.timestamp is None, e.timestamp.timestamp() if e.timestamp else 0)
    )
    return unique


def load_zsh_sessions(config: LoaderConfig) -> Optional[ParsedHistory]:
    """Merge ~/.zsh_sessions/*.history (and ~/.zsh_history if present).

    macOS Terminal keeps a history fragment per window session and only
    folds them into ~/.zsh_history on clean exit. Unreadable fragments are
    skipped.

    Args:
        config: Host configuration

    Returns:
        Merged ParsedHistory, or None if no session fragment could be read
    """
    session_files = list_zsh_session_files(config)
    if not session_files:
        return None

    collected: List[HistoryEntry] = []
    read_any = False
    for session_file in session_files:
        try:
            content = _read_text(session_file)
        except OSError as e:
            logger.warning("Failed to read %s: %s", session_file, e)
            continue
        read_any = True
        collected.extend(parse_zsh_history(content))

    if not read_any:
        return None

    history_file = PARSERS[Shell.ZSH].default_path(config)
    if history_file.is_file():
        try:
            collected.extend(parse_zsh_history(_read_text(history_file)))
        except OSError as e:
            logger.warning("Failed to read %s: %s", history_file, e)

    logger.debug("Merged %d zsh session files", len(session_files))
    return ParsedHistory(
        entries=tuple(merge_entries(collected)),
        shell=Shell.ZSH,
        file_path=str(get_zsh_sessions_dir(config)) + MERGED_SUFFIX,
    )


def _shell_order(preferred: Optional[Shell], config: LoaderConfig) -> List[Shell]:
    first = Shell(preferred) if preferred else detect_shell(config)
    return [first] + [s for s in Shell if s != first]


def candidate_paths(config: LoaderConfig) -> List[Tuple[Shell, Path]]:
    """Every default location the loader may probe, in enumeration order."""
    candidates = [(shell, PARSERS[shell].default_path(config)) for shell in Shell]
    candidates.insert(1, (Shell.ZSH, get_zsh_sessions_dir(config)))
    return candidates


def find_history_file(
    preferred: Optional[Shell] = None, config: Optional[LoaderConfig] = None
) -> Optional[Tuple[Shell, Path]]:
    """Find the first existing history source.

    Probes the preferred shell (or the detected one) first, then the rest
    in Shell declaration order. For zsh a directory of session fragments
    counts as a source.

    Args:
        preferred: Shell to try first
        config: Host configuration (default: current environment)

    Returns:
        (shell, path) for the first hit, or None
    """
    config = config or LoaderConfig.from_environment()

    for shell in _shell_order(preferred, config):
        path = PARSERS[shell].default_path(config)
        if path.is_file():
            return shell, path
        if shell == Shell.ZSH and list_zsh_session_files(config):
            return shell, get_zsh_sessions_dir(config)

    return None


def parse_history_file(file_path: Path, shell: Shell) -> ParsedHistory:
    """Read and parse one history file.

    Args:
        file_path: File to read
        shell: Dialect of the file

    Returns:
        ParsedHistory for the file

    Raises:
        ValueError: If shell is not supported
        OSError: If the file cannot be read
    """
    parser = get_parser(shell)
    entries = parser.parse(_read_text(Path(file_path)))
    return ParsedHistory(entries=tuple(entries), shell=Shell(shell), file_path=str(file_path))


def _load_default(shell: Shell, config: LoaderConfig) -> Optional[ParsedHistory]:
    """Load one shell's default history, or None if nothing readable is there."""
    path = PARSERS[shell].default_path(config)
    if shell == Shell.ZSH and _needs_session_merge(path):
        merged = load_zsh_sessions(config)
        if merged is not None:
            return merged

    if not path.is_file():
        return None

    logger.debug("Loading %s history from %s", shell.value, path)
    try:
        return parse_history_file(path, shell)
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None


def load_history(
    shell: Optional[Shell] = None,
    file_path: Optional[Path] = None,
    config: Optional[LoaderConfig] = None,
) -> ParsedHistory:
    """Locate, read and parse the user's shell history.

    With an explicit file_path the file is parsed as the given shell (or
    the detected one). Otherwise default locations are probed in the
    order of find_history_file(); a source that exists but cannot be read
    is skipped. For zsh, session fragments are merged when ~/.zsh_history
    is missing or small.

    Args:
        shell: Dialect to use or prefer
        file_path: Explicit history file
        config: Host configuration (default: current environment)

    Returns:
        ParsedHistory

    Raises:
        HistoryNotFoundError: If no readable history source exists

    Example:
        >>> history = load_history()
        >>> print(f"{history.entry_count} commands from {history.file_path}")
    """
    config = config or LoaderConfig.from_environment()

    if file_path is not None:
        path = Path(file_path).expanduser()
        if not path.is_file():
            raise HistoryNotFoundError([path])
        try:
            return parse_history_file(path, Shell(shell) if shell else detect_shell(config))
        except OSError as e:
            raise HistoryNotFoundError([path]) from e

    for candidate in _shell_order(shell, config):
        history = _load_default(candidate, config)
        if history is not None:
            return history

    raise HistoryNotFoundError([p for _, p in candidate_paths(config)])


def filter_by_year(history: ParsedHistory, year: int) -> ParsedHistory:
    """Keep only entries timestamped in the given calendar year (local time).

    Undated entries are dropped. An empty result is valid; callers usually
    fall back to the unfiltered history in that case.

    Args:
        history: History to filter
        year: Calendar year, e.g. 2025

    Returns:
        New ParsedHistory with the matching entries
    """
    entries = tuple(
        e for e in history.entries if e.timestamp and e.timestamp.astimezone().year == year
    )
    return ParsedHistory(entries=entries, shell=history.shell, file_path=history.file_path)
