"""Package manager usage analysis for CLI Wrapped."""

import re
from typing import Dict, List, Optional, Sequence

from .constants import LOYALTY_THRESHOLD, PACKAGE_MANAGER_PATTERNS
from .models import HistoryEntry, PackageManagerLoyalty, PackageManagerStats

_MANAGERS = [
    (name, [re.compile(p, re.ASCII) for p in patterns]) for name, patterns in PACKAGE_MANAGER_PATTERNS
]


def match_package_manager(command: str) -> Optional[str]:
    """Name of the first package manager in table order whose pattern matches."""
    cmd = command.strip()
    for name, patterns in _MANAGERS:
        if any(pattern.search(cmd) for pattern in patterns):
            return name
    return None


def analyze_package_managers(entries: Sequence[HistoryEntry]) -> List[PackageManagerStats]:
    """Count package manager invocations.

    Each entry counts for at most one manager. Percentages are shares of
    all detected package-manager invocations; equal counts keep table order.

    Args:
        entries: History entries

    Returns:
        Managers with at least one invocation, highest count first
    """
    counts: Dict[str, int] = {name: 0 for name, _ in _MANAGERS}
    total = 0
    for entry in entries:
        name = match_package_manager(entry.command)
        if name:
            counts[name] += 1
            total += 1

    if total == 0:
        return []

    stats = [
        PackageManagerStats(manager=name, count=count, percentage=count / total * 100)
        for name, count in counts.items()
        if count > 0
    ]
    return sorted(stats, key=lambda s: s.count, reverse=True)


def get_primary_package_manager(stats: Sequence[PackageManagerStats]) -> Optional[str]:
    return stats[0].manager if stats else None


def detect_package_manager_loyalty(
    stats: Sequence[PackageManagerStats],
) -> PackageManagerLoyalty:
    """Loyal means the top manager holds at least LOYALTY_THRESHOLD percent."""
    if not stats:
        return PackageManagerLoyalty(is_loyal=False, manager=None, percentage=0.0)
    primary = stats[0]
    return PackageManagerLoyalty(
        is_loyal=primary.percentage >= LOYALTY_THRESHOLD,
        manager=primary.manager,
        percentage=primary.percentage,
    )
