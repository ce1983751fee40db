"""Struggle detection for CLI Wrapped.

Each detector is an independent heuristic over the entry sequence:
- detect_rage_sudo(): a command immediately retried with sudo
- detect_typos(): misspellings of common tools
- detect_man_page_checks(): the same man page opened repeatedly
- detect_repeated_failures(): the same command 3+ times in a row

analyze_struggles() merges their findings, highest count first.
Descriptions never quote the user's commands.
"""

import re
from typing import Dict, List, Optional, Sequence

from .constants import (
    MAN_PAGE_MIN_LOOKUPS,
    REPEAT_STREAK_LENGTH,
    TYPO_MIN_COUNT,
    TYPO_PATTERNS,
)
from .models import HistoryEntry, Struggle
from .utils import pluralize

_TYPO_RULES = [(re.compile(pattern, re.ASCII), correct) for pattern, correct in TYPO_PATTERNS]
_MAN_LOOKUP = re.compile(r"^man\s+(\S+)", re.ASCII)


def detect_rage_sudo(entries: Sequence[HistoryEntry]) -> Optional[Struggle]:
    """Count commands immediately re-run as "sudo <same command>"."""
    count = 0
    for prev, curr in zip(entries, entries[1:]):
        prev_cmd = prev.command.strip()
        curr_cmd = curr.command.strip()
        if curr_cmd.startswith("sudo ") and curr_cmd[5:].strip() == prev_cmd:
            count += 1

    if count == 0:
        return None
    return Struggle(
        type="rage-sudo",
        description=f"You forgot sudo {pluralize(count, 'time')} and had to retry",
        count=count,
    )


def detect_typos(entries: Sequence[HistoryEntry]) -> List[Struggle]:
    """Find misspelled commands, one finding per intended command.

    Rules are tried in table order and only the first match counts for an
    entry. Intended commands mistyped fewer than TYPO_MIN_COUNT times are
    not reported.
    """
    typo_counts: Dict[str, int] = {}
    for entry in entries:
        cmd = entry.command.strip()
        for pattern, correct in _TYPO_RULES:
            if pattern.search(cmd):
                typo_counts[correct] = typo_counts.get(correct, 0) + 1
                break

    findings = [
        Struggle(
            type="typo",
            description=f'You mistyped "{correct}" {pluralize(count, "time")}',
            count=count,
        )
        for correct, count in typo_counts.items()
        if count >= TYPO_MIN_COUNT
    ]
    return sorted(findings, key=lambda s: s.count, reverse=True)


def detect_man_page_checks(entries: Sequence[HistoryEntry]) -> Optional[Struggle]:
    """Report man pages looked up more than once.

    The count is the total number of lookups of every topic that crossed
    the threshold.
    """
    lookups: Dict[str, int] = {}
    for entry in entries:
        match = _MAN_LOOKUP.match(entry.command)
        if match:
            topic = match.group(1)
            lookups[topic] = lookups.get(topic, 0) + 1

    total = sum(count for count in lookups.values() if count >= MAN_PAGE_MIN_LOOKUPS)
    if total == 0:
        return None
    return Struggle(
        type="man-page-check",
        description=(
            f"You checked the manual {pluralize(total, 'time')} "
            "for commands you've looked up before"
        ),
        count=total,
    )


def detect_repeated_failures(entries: Sequence[HistoryEntry]) -> Optional[Struggle]:
    """Count runs of the same command REPEAT_STREAK_LENGTH+ times in a row.

    A run counts once however long it gets.
    """
    streak_count = 0
    current_streak = 1
    prev_cmd = ""

    for entry in entries:
        cmd = entry.command.strip()
        if cmd and cmd == prev_cmd:
            current_streak += 1
            if current_streak == REPEAT_STREAK_LENGTH:
                streak_count += 1
        else:
            current_streak = 1
        prev_cmd = cmd

    if streak_count == 0:
        return None
    return Struggle(
        type="repeated-failure",
        description=(
            f"You ran the same command {REPEAT_STREAK_LENGTH}+ times in a row "
            f"{pluralize(streak_count, 'time')} (hoping for a different result?)"
        ),
        count=streak_count,
    )


def analyze_struggles(entries: Sequence[HistoryEntry]) -> List[Struggle]:
    """Run every struggle detector and rank the findings by count."""
    struggles: List[Struggle] = []

    rage_sudo = detect_rage_sudo(entries)
    if rage_sudo:
        struggles.append(rage_sudo)

    struggles.extend(detect_typos(entries))

    man_pages = detect_man_page_checks(entries)
    if man_pages:
        struggles.append(man_pages)

    repeated = detect_repeated_failures(entries)
    if repeated:
        struggles.append(repeated)

    return sorted(struggles, key=lambda s: s.count, reverse=True)
