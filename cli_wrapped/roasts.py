"""Local roast generation for CLI Wrapped.

This module turns an AnalysisResult into short, teasing one-liners for
each summary screen:
- describe_time_of_day(): Name the part of the day an hour falls in
- get_fallback_roasts(): Deterministic roasts built from aggregates only

Roasts only ever mention base command names, counts and percentages.
"""

from dataclasses import dataclass

from .constants import (
    COMMAND_VOLUME_HIGH,
    COMMAND_VOLUME_MEDIUM,
    LATE_NIGHT_END,
    LATE_NIGHT_START,
)
from .models import AnalysisResult
from .utils import classify


@dataclass(frozen=True)
class Roasts:
    """One roast per summary screen plus a headline and a closer."""

    headline: str
    top_commands: str
    time_patterns: str
    struggles: str
    git_activity: str
    package_manager: str
    overall: str


def describe_time_of_day(hour: int) -> str:
    """Describe when an hour falls.

    Example:
        >>> describe_time_of_day(2)
        'late night/early morning (vampire hours)'
        >>> describe_time_of_day(15)
        'afternoon'
    """
    if 0 <= hour < 6:
        return "late night/early morning (vampire hours)"
    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 18:
        return "afternoon"
    return "evening"


def get_fallback_roasts(analysis: AnalysisResult) -> Roasts:
    """Build roasts from the aggregate numbers alone.

    Args:
        analysis: Result of analyze_history()

    Returns:
        Roasts for every screen
    """
    top = analysis.top_commands[0] if analysis.top_commands else None
    loyalty = analysis.package_manager_loyalty

    headline = classify(
        analysis.total_commands,
        [
            (COMMAND_VOLUME_HIGH, "The Terminal Velocity Award"),
            (COMMAND_VOLUME_MEDIUM, "The Command Line Warrior"),
        ],
        "The Weekend Shell Tourist",
    )

    if top:
        top_commands = (
            f"You ran '{top.command}' {top.count:,} times. "
            "That's commitment... or muscle memory."
        )
    else:
        top_commands = "Your command diversity is... interesting."

    if analysis.peak_hour >= LATE_NIGHT_START or analysis.peak_hour < LATE_NIGHT_END:
        time_patterns = "Coding at this hour? Your keyboard should file for overtime."
    else:
        time_patterns = f"Peak productivity at {analysis.peak_hour}:00. Your coffee knows."

    if analysis.struggles:
        struggles = "We all make typos. Some of us just make more than others."
    else:
        struggles = (
            "No typos detected? Either you're perfect or your history is hiding something."
        )

    if analysis.git_stats:
        git_activity = (
            f"{analysis.git_stats.total_commits} commits. "
            "Your git log is basically a diary at this point."
        )
    else:
        git_activity = "No git detected. Living dangerously without version control?"

    if loyalty.manager:
        package_manager = (
            f"{loyalty.percentage:.0f}% loyal to {loyalty.manager}. "
            "That's called brand loyalty."
            if loyalty.is_loyal
            else f"{loyalty.percentage:.0f}% {loyalty.manager}, the rest is anyone's guess."
        )
    else:
        package_manager = "No package manager preference? A true CLI minimalist."

    return Roasts(
        headline=headline,
        top_commands=top_commands,
        time_patterns=time_patterns,
        struggles=struggles,
        git_activity=git_activity,
        package_manager=package_manager,
        overall=f"{analysis.total_commands:,} commands. That's a lot of Enter key abuse.",
    )
