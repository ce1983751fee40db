"""Builders and sample data shared by the test modules."""

from datetime import datetime, timezone
from pathlib import Path

from cli_wrapped.models import HistoryEntry


def entry(command, timestamp=None):
    """Build a HistoryEntry whose raw_line is the command."""
    return HistoryEntry(command=command, timestamp=timestamp, raw_line=command)


def entries(*commands):
    """Build undated entries from command strings."""
    return [entry(c) for c in commands]


def utc(epoch):
    """Aware UTC datetime for epoch seconds."""
    return datetime.fromtimestamp(epoch, tz=timezone.utc)


def write(path: Path, content: str) -> Path:
    """Write a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


BASH_HISTORY_2024 = """#1718000000
git status
#1718000060
git commit -m "wip"
#1718000120
git push
#1718000180
npm install
#1718000240
npm test
#1718000300
ls -la
"""
