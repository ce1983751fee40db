"""Test configuration and fixtures for cli-wrapped."""

import pytest

from cli_wrapped.config import LoaderConfig
from cli_wrapped.models import ParsedHistory, Shell

from helpers import entry, utc


@pytest.fixture
def home(tmp_path):
    """An empty home directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    return home_dir


@pytest.fixture
def zsh_config(home):
    """Loader configuration for a zsh user on Linux."""
    return LoaderConfig(home=home, shell_env="/bin/zsh", platform="linux")


@pytest.fixture
def bash_config(home):
    """Loader configuration for a bash user on Linux."""
    return LoaderConfig(home=home, shell_env="/bin/bash", platform="linux")


@pytest.fixture
def sample_history():
    """A small bash history from June 2024."""
    base = 1718000000  # 2024-06-10 06:13:20 UTC
    commands = [
        "git status",
        'git commit -m "wip"',
        "git push",
        "npm install",
        "npm test",
        "ls -la",
        "gut status",
        "gut status",
        "apt update",
        "sudo apt update",
    ]
    return ParsedHistory(
        entries=tuple(entry(c, utc(base + i * 60)) for i, c in enumerate(commands)),
        shell=Shell.BASH,
        file_path="/home/test/.bash_history",
    )
