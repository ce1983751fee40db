"""CLI interface for CLI Wrapped.

This module provides the command-line interface for the yearly shell
history summary. It uses Click for argument parsing and Rich for terminal
formatting.

Commands:
    summary: Show your year at the command line
    share: Generate or decode a shareable summary code
    info: Show the detected shell and history locations
"""

import datetime as dt
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from sparklines import sparklines

from .analysis import analyze_history
from .config import LoaderConfig
from .constants import DATE_FORMAT, DEFAULT_TOP_COMMANDS
from .loader import (
    HistoryNotFoundError,
    candidate_paths,
    detect_shell,
    filter_by_year,
    load_history,
)
from .models import AnalysisResult, ParsedHistory, Shell
from .roasts import Roasts, describe_time_of_day, get_fallback_roasts
from .share import build_share_summary, decode_share_summary, encode_share_summary
from .utils import format_hour, format_timestamp

__all__ = ["main"]

console = Console()

SHELL_CHOICES = [s.value for s in Shell]


def safe_sparkline(values: List[int]) -> Optional[str]:
    """Generate a sparkline string, returning None on failure.

    Wraps the sparklines library with error handling for edge cases
    like empty lists, single values, or invalid data.

    Args:
        values: List of integers to visualize

    Returns:
        Sparkline string or None if generation fails
    """
    if not values or len(values) < 2:
        return None
    try:
        result = sparklines(values)
        return result[0] if result else None
    except (ValueError, TypeError):
        return None


# Example text for each command
EXAMPLES = {
    "summary": """
Examples:
  cli-wrapped summary                        # This year's summary
  cli-wrapped summary --year 2024            # A specific year
  cli-wrapped summary --shell fish           # Prefer fish history
  cli-wrapped summary -f ~/old_history -s bash   # Explicit history file
  cli-wrapped summary --format json          # JSON output for scripting
""",
    "share": """
Examples:
  cli-wrapped share                          # Share code for this year
  cli-wrapped share --raw                    # Show the shared fields as JSON
  cli-wrapped share --decode <code>          # Inspect any share code
  cli-wrapped share --no-copy                # Don't copy code to clipboard
""",
    "info": """
Examples:
  cli-wrapped info                           # Show detected shell and history files
""",
}


def show_examples(command: str) -> None:
    """Display example usage for a command."""
    if command in EXAMPLES:
        console.print(EXAMPLES[command])
    else:
        console.print(f"[yellow]No examples available for '{command}'[/yellow]")


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    sys.exit(1)


def _load_year(
    year: Optional[int], shell: Optional[str], file_path: Optional[str]
) -> Tuple[ParsedHistory, int, bool]:
    """Load history and narrow it to one year.

    Returns:
        (history to analyse, year, whether the unfiltered history was used)
    """
    if year is None:
        year = dt.datetime.now().year
    elif not dt.MINYEAR <= year <= dt.MAXYEAR:
        _fail(f"Invalid year: {year}")

    try:
        history = load_history(
            shell=Shell(shell) if shell else None,
            file_path=Path(file_path) if file_path else None,
        )
    except HistoryNotFoundError as e:
        _fail(str(e))

    filtered = filter_by_year(history, year)
    if filtered.entries:
        return filtered, year, False
    return history, year, True


def _display_summary(
    analysis: AnalysisResult, history: ParsedHistory, year: int, roasts: Roasts
) -> None:
    """Render the summary screens with rich formatting."""
    console.print()
    console.print(
        Panel(
            f"[bold]{analysis.total_commands:,}[/bold] commands | "
            f"[bold]{analysis.unique_commands:,}[/bold] unique | "
            f"{history.shell.value} history",
            title=f"[bold green]CLI Wrapped {year}: {roasts.headline}[/bold green]",
        )
    )

    # Top commands
    if analysis.top_commands:
        table = Table(title="Top Commands")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Command", style="cyan")
        table.add_column("Count", justify="right", style="green")
        table.add_column("Share", justify="right", style="yellow")
        for i, cmd in enumerate(analysis.top_commands, 1):
            table.add_row(str(i), escape(cmd.command), f"{cmd.count:,}", f"{cmd.percentage:.1f}%")
        console.print(table)
    console.print(f"[italic]{roasts.top_commands}[/italic]\n")

    # Time patterns
    console.print("[bold]When you type[/bold]")
    sparkline = safe_sparkline([p.count for p in analysis.time_patterns])
    if sparkline:
        console.print(f"  {sparkline}")
        console.print("  0     6     12    18   23")
    console.print(
        f"  Peak hour: {format_hour(analysis.peak_hour)} "
        f"({describe_time_of_day(analysis.peak_hour)})"
    )
    console.print(f"  Peak day:  {analysis.peak_day}")
    if analysis.most_active_date:
        console.print(
            f"  Busiest day: {analysis.most_active_date.date} "
            f"({analysis.most_active_date.count:,} commands)"
        )
    if analysis.date_range:
        console.print(
            f"  Range: {format_timestamp(analysis.date_range.start, DATE_FORMAT)} to "
            f"{format_timestamp(analysis.date_range.end, DATE_FORMAT)}"
        )
    console.print(f"[italic]{roasts.time_patterns}[/italic]\n")

    # Struggles
    console.print("[bold]Struggles[/bold]")
    if analysis.struggles:
        for struggle in analysis.struggles:
            console.print(f"  • {struggle.description}")
    else:
        console.print("  [dim]None detected[/dim]")
    console.print(f"[italic]{roasts.struggles}[/italic]\n")

    # Git
    git = analysis.git_stats
    if git:
        table = Table(title="Git")
        table.add_column("Commits", justify="right")
        table.add_column("Pushes", justify="right")
        table.add_column("Pulls", justify="right")
        table.add_column("Branches", justify="right")
        table.add_column("Merges", justify="right")
        table.add_column("Rebases", justify="right")
        table.add_column("Stashes", justify="right")
        table.add_column("Favourite", style="cyan")
        table.add_row(
            str(git.total_commits),
            str(git.total_pushes),
            str(git.total_pulls),
            str(git.branches),
            str(git.merges),
            str(git.rebases),
            str(git.stashes),
            escape(git.most_used_git_command),
        )
        console.print(table)
    console.print(f"[italic]{roasts.git_activity}[/italic]\n")

    # Package managers
    if analysis.package_managers:
        table = Table(title="Package Managers")
        table.add_column("Manager", style="cyan")
        table.add_column("Count", justify="right", style="green")
        table.add_column("Share", justify="right", style="yellow")
        for pm in analysis.package_managers:
            table.add_row(pm.manager, f"{pm.count:,}", f"{pm.percentage:.0f}%")
        console.print(table)
    console.print(f"[italic]{roasts.package_manager}[/italic]\n")

    console.print(f"[bold]{roasts.overall}[/bold]")
    console.print(f"[dim]Longest command: {analysis.longest_command_length:,} characters[/dim]")


@click.group()
@click.version_option(package_name="cli-wrapped")
def main():
    """Spotify Wrapped, but for your command line.

    Reads your zsh, bash or fish history and summarises a year of typing:
    top commands, when you work, typos, git and package manager habits.
    Nothing is sent anywhere.
    """
    pass


@main.command()
@click.option("--year", "-y", type=int, default=None, help="Year to summarise (default: current year)")
@click.option("--shell", "-s", type=click.Choice(SHELL_CHOICES), default=None, help="Shell history to read")
@click.option("--file", "-f", "file_path", type=str, default=None, help="Explicit history file")
@click.option(
    "--limit",
    "-n",
    default=DEFAULT_TOP_COMMANDS,
    type=click.IntRange(min=1),
    help="Number of top commands to show",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--example", is_flag=True, help="Show usage examples")
def summary(
    year: Optional[int],
    shell: Optional[str],
    file_path: Optional[str],
    limit: int,
    output_format: str,
    example: bool,
):
    """Show your year at the command line."""
    if example:
        show_examples("summary")
        return

    history, year, used_all = _load_year(year, shell, file_path)
    analysis = analyze_history(history, top_limit=limit)

    if output_format == "json":
        console.print_json(data=analysis.to_dict())
        return

    if used_all:
        console.print(f"[yellow]Note: Using all history (no timestamps for {year})[/yellow]")

    _display_summary(analysis, history, year, get_fallback_roasts(analysis))


@main.command()
@click.option("--year", "-y", type=int, default=None, help="Year to summarise (default: current year)")
@click.option("--shell", "-s", type=click.Choice(SHELL_CHOICES), default=None, help="Shell history to read")
@click.option("--file", "-f", "file_path", type=str, default=None, help="Explicit history file")
@click.option("--raw", is_flag=True, help="Output the shared fields as JSON instead of a code")
@click.option("--no-copy", is_flag=True, help="Don't copy the code to the clipboard")
@click.option("--decode", "-d", type=str, default=None, help="Decode and display a share code")
@click.option("--example", is_flag=True, help="Show usage examples")
def share(
    year: Optional[int],
    shell: Optional[str],
    file_path: Optional[str],
    raw: bool,
    no_copy: bool,
    decode: Optional[str],
    example: bool,
):
    """Generate a share code containing only aggregate statistics."""
    if example:
        show_examples("share")
        return

    if decode:
        _decode_share_code(decode)
        return

    history, year, _ = _load_year(year, shell, file_path)
    summary_data = build_share_summary(analyze_history(history), year, history.shell)

    if raw:
        console.print_json(data=summary_data.to_dict())
        return

    code = encode_share_summary(summary_data)
    console.print(f"[bold green]Your CLI Wrapped {year} share code:[/bold green]")
    # Plain print so Rich never wraps or truncates the code
    print(code)

    if not no_copy:
        try:
            import pyperclip

            pyperclip.copy(code)
            console.print("\n[green]Copied to clipboard![/green]")
        except (ImportError, OSError, RuntimeError):
            # ImportError: pyperclip not installed
            # OSError/RuntimeError: clipboard access failed (headless, permissions, etc.)
            console.print("\n[yellow]Could not copy to clipboard[/yellow]")


def _decode_share_code(code: str) -> None:
    """Decode and display a share code."""
    try:
        data = decode_share_summary(code)
    except ValueError as e:
        console.print("[red]Error: Failed to decode share code[/red]")
        console.print(f"[dim]{e}[/dim]")
        sys.exit(1)

    console.print("[bold cyan]Decoded share code[/bold cyan]")
    console.print()
    console.print(f"[bold]Year:[/bold]     {data.y}")
    console.print(f"[bold]Shell:[/bold]    {data.sh}")
    console.print(f"[bold]Commands:[/bold] {data.t:,} ({data.u:,} unique)")
    console.print(f"[bold]Peak:[/bold]     {format_hour(data.ph)} on {data.pd}s")
    if data.ad:
        console.print(f"[bold]Busiest:[/bold]  {data.ad[0]} ({data.ad[1]:,} commands)")
    console.print()

    sparkline = safe_sparkline(data.hr)
    if sparkline:
        console.print("[bold]Hourly Activity:[/bold]")
        console.print(f"  {sparkline}")
        console.print()

    if data.tc:
        console.print("[bold]Top Commands:[/bold]")
        for i, (name, count) in enumerate(data.tc, 1):
            console.print(f"  {i}. {escape(name):12} {count:,}")
        console.print()

    if data.g:
        commits, pushes, pulls = data.g[0], data.g[1], data.g[2]
        console.print(
            f"[bold]Git:[/bold] {commits} commits, {pushes} pushes, {pulls} pulls "
            f"(favourite: {data.gf})"
        )
    if data.pm:
        managers = ", ".join(f"{name} {pct}%" for name, pct in data.pm)
        console.print(f"[bold]Package managers:[/bold] {managers}")

    console.print()
    console.print("[green]This code contains only aggregate statistics.[/green]")
    console.print("[dim]  No command arguments, file paths or history lines.[/dim]")


@main.command()
@click.option("--example", is_flag=True, help="Show usage examples")
def info(example: bool):
    """Show the detected shell and where history is read from."""
    if example:
        show_examples("info")
        return

    config = LoaderConfig.from_environment()
    console.print(f"[bold]Detected shell:[/bold] {detect_shell(config).value}")
    console.print(f"[bold]$SHELL:[/bold] {config.shell_env or '(unset)'}")
    console.print()

    table = Table(title="History Locations")
    table.add_column("Shell", style="cyan")
    table.add_column("Path")
    table.add_column("Found", justify="center")
    for shell, path in candidate_paths(config):
        found = "[green]yes[/green]" if path.exists() else "[dim]no[/dim]"
        table.add_row(shell.value, str(path), found)
    console.print(table)


if __name__ == "__main__":
    main()
