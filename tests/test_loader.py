"""Tests for history discovery, loading and year filtering."""

from pathlib import Path
from unittest.mock import patch

import pytest

from cli_wrapped import loader
from cli_wrapped.config import LoaderConfig
from cli_wrapped.loader import (
    HistoryNotFoundError,
    candidate_paths,
    detect_shell,
    filter_by_year,
    find_history_file,
    load_history,
    load_zsh_sessions,
    merge_entries,
    parse_history_file,
)
from cli_wrapped.models import HistoryEntry, ParsedHistory, Shell

from helpers import entry, utc, write


class TestDetectShell:
    """Tests for shell detection."""

    @pytest.mark.parametrize(
        "shell_env,expected",
        [
            ("/bin/zsh", Shell.ZSH),
            ("/usr/local/bin/fish", Shell.FISH),
            ("/bin/bash", Shell.BASH),
            ("/opt/homebrew/bin/zsh", Shell.ZSH),
        ],
    )
    def test_from_shell_env(self, tmp_path, shell_env, expected):
        """Test $SHELL decides the dialect."""
        config = LoaderConfig(home=tmp_path, shell_env=shell_env)
        assert detect_shell(config) == expected

    def test_darwin_fallback(self, tmp_path):
        """Test macOS defaults to zsh."""
        assert detect_shell(LoaderConfig(home=tmp_path, platform="darwin")) == Shell.ZSH

    def test_linux_fallback(self, tmp_path):
        """Test other platforms default to bash."""
        assert detect_shell(LoaderConfig(home=tmp_path, platform="linux")) == Shell.BASH

    def test_unknown_shell_env_falls_back(self, tmp_path):
        """Test an unrecognised $SHELL uses the platform default."""
        config = LoaderConfig(home=tmp_path, shell_env="/bin/tcsh", platform="darwin")
        assert detect_shell(config) == Shell.ZSH


class TestLoaderConfig:
    """Tests for environment capture."""

    def test_from_environment_mapping(self):
        """Test SHELL and XDG_DATA_HOME are read from the mapping."""
        config = LoaderConfig.from_environment(
            {"SHELL": "/usr/bin/fish", "XDG_DATA_HOME": "/data"}
        )
        assert config.shell_env == "/usr/bin/fish"
        assert config.xdg_data_home == Path("/data")
        assert config.data_dir == Path("/data")
        assert config.home == Path.home()

    def test_from_environment_defaults(self):
        """Test missing variables fall back to empty values."""
        config = LoaderConfig.from_environment({})
        assert config.shell_env == ""
        assert config.xdg_data_home is None
        assert config.data_dir == Path.home() / ".local" / "share"


class TestFindHistoryFile:
    """Tests for default location probing."""

    def test_preferred_shell_first(self, zsh_config, home):
        """Test the preferred shell wins when its file exists."""
        write(home / ".zsh_history", ": 1704067200:0;ls\n")
        write(home / ".bash_history", "ls\n")
        assert find_history_file(Shell.BASH, zsh_config) == (Shell.BASH, home / ".bash_history")

    def test_detected_shell_first(self, zsh_config, home):
        """Test the detected shell is probed before others."""
        write(home / ".zsh_history", ": 1704067200:0;ls\n")
        write(home / ".bash_history", "ls\n")
        assert find_history_file(None, zsh_config) == (Shell.ZSH, home / ".zsh_history")

    def test_falls_through_to_other_shells(self, zsh_config, home):
        """Test a missing preferred file falls through in declaration order."""
        fish_file = write(home / ".local" / "share" / "fish" / "fish_history", "- cmd: ls\n")
        assert find_history_file(Shell.ZSH, zsh_config) == (Shell.FISH, fish_file)

    def test_zsh_sessions_dir_counts(self, zsh_config, home):
        """Test session fragments count as a zsh source."""
        write(home / ".zsh_sessions" / "A.history", ": 1704067200:0;ls\n")
        assert find_history_file(None, zsh_config) == (Shell.ZSH, home / ".zsh_sessions")

    def test_nothing_found(self, zsh_config):
        """Test None when no source exists."""
        assert find_history_file(None, zsh_config) is None


class TestCandidatePaths:
    """Tests for the probe list."""

    def test_enumeration_order(self, zsh_config, home):
        """Test every default location is listed, sessions after zsh."""
        paths = [p for _, p in candidate_paths(zsh_config)]
        assert paths == [
            home / ".zsh_history",
            home / ".zsh_sessions",
            home / ".bash_history",
            home / ".local" / "share" / "fish" / "fish_history",
        ]


class TestMergeEntries:
    """Tests for session merge deduplication and ordering."""

    def test_dedupes_on_timestamp_and_command(self):
        """Test identical (timestamp, command) pairs collapse."""
        merged = merge_entries(
            [entry("ls", utc(100)), entry("ls", utc(100)), entry("ls", utc(200))]
        )
        assert len(merged) == 2

    def test_first_occurrence_wins(self):
        """Test the first duplicate's raw_line is kept."""
        first = HistoryEntry(command="ls", timestamp=utc(100), raw_line="first")
        second = HistoryEntry(command="ls", timestamp=utc(100), raw_line="second")
        assert merge_entries([first, second])[0].raw_line == "first"

    def test_sorted_with_undated_last(self):
        """Test chronological order and undated entries at the end."""
        merged = merge_entries(
            [entry("c", utc(300)), entry("undated"), entry("a", utc(100)), entry("b", utc(200))]
        )
        assert [e.command for e in merged] == ["a", "b", "c", "undated"]


class TestLoadZshSessions:
    """Tests for macOS zsh session merging."""

    def test_no_sessions(self, zsh_config):
        """Test None without a sessions directory."""
        assert load_zsh_sessions(zsh_config) is None

    def test_merges_fragments_and_canonical(self, zsh_config, home):
        """Test fragments and ~/.zsh_history merge and dedupe."""
        write(home / ".zsh_sessions" / "A.history", ": 300:0;pwd\n: 100:0;ls\n")
        write(home / ".zsh_sessions" / "B.history", ": 100:0;ls\n: 200:0;cd /tmp\n")
        write(home / ".zsh_history", ": 400:0;git status\n")

        history = load_zsh_sessions(zsh_config)

        assert history.shell == Shell.ZSH
        assert [e.command for e in history.entries] == ["ls", "cd /tmp", "pwd", "git status"]
        assert history.file_path == f"{home / '.zsh_sessions'} (merged)"

    def test_ignores_other_files(self, zsh_config, home):
        """Test only *.history files are read."""
        write(home / ".zsh_sessions" / "A.history", ": 100:0;ls\n")
        write(home / ".zsh_sessions" / "A.session", "not history\n")
        history = load_zsh_sessions(zsh_config)
        assert [e.command for e in history.entries] == ["ls"]

    def test_unreadable_fragment_skipped(self, zsh_config, home):
        """Test a fragment that cannot be read is skipped."""
        write(home / ".zsh_sessions" / "A.history", ": 100:0;ls\n")
        bad = write(home / ".zsh_sessions" / "B.history", ": 200:0;pwd\n")
        real_read = loader._read_text

        def fake_read(path):
            if path == bad:
                raise PermissionError("denied")
            return real_read(path)

        with patch("cli_wrapped.loader._read_text", side_effect=fake_read):
            history = load_zsh_sessions(zsh_config)

        assert [e.command for e in history.entries] == ["ls"]

    def test_all_fragments_unreadable(self, zsh_config, home):
        """Test None when no fragment could be read."""
        write(home / ".zsh_sessions" / "A.history", ": 100:0;ls\n")
        with patch("cli_wrapped.loader._read_text", side_effect=OSError("boom")):
            assert load_zsh_sessions(zsh_config) is None


class TestLoadHistory:
    """Tests for the one-call loader."""

    def test_explicit_file(self, zsh_config, tmp_path):
        """Test an explicit file is parsed as the given shell."""
        path = write(tmp_path / "old_history", "ls\npwd\n")
        history = load_history(Shell.BASH, path, zsh_config)

        assert history.shell == Shell.BASH
        assert history.entry_count == 2
        assert history.file_path == str(path)

    def test_explicit_file_detected_shell(self, bash_config, tmp_path):
        """Test an explicit file without a shell uses the detected one."""
        path = write(tmp_path / "hist", "#1704067200\nls\n")
        history = load_history(None, path, bash_config)
        assert history.shell == Shell.BASH
        assert history.entries[0].timestamp is not None

    def test_explicit_file_missing(self, zsh_config, tmp_path):
        """Test a missing explicit file raises with that path."""
        missing = tmp_path / "nope"
        with pytest.raises(HistoryNotFoundError) as exc_info:
            load_history(Shell.BASH, missing, zsh_config)
        assert exc_info.value.tried_paths == [missing]

    def test_not_found_lists_every_location(self, zsh_config, home):
        """Test the error names every probed path."""
        with pytest.raises(HistoryNotFoundError) as exc_info:
            load_history(config=zsh_config)

        error = exc_info.value
        assert isinstance(error, FileNotFoundError)
        assert "Could not find shell history file" in str(error)
        assert home / ".zsh_history" in error.tried_paths
        assert home / ".bash_history" in error.tried_paths
        assert str(home / ".bash_history") in str(error)

    def test_falls_back_to_bash(self, zsh_config, home):
        """Test a zsh user with only bash history gets bash."""
        write(home / ".bash_history", "ls\n")
        history = load_history(config=zsh_config)
        assert history.shell == Shell.BASH

    def test_large_zsh_history_not_merged(self, zsh_config, home):
        """Test a substantial ~/.zsh_history is used on its own."""
        lines = "".join(f": {1704067200 + i}:0;echo {i}\n" for i in range(100))
        canonical = write(home / ".zsh_history", lines)
        write(home / ".zsh_sessions" / "A.history", ": 100:0;session only\n")

        history = load_history(config=zsh_config)

        assert history.file_path == str(canonical)
        assert history.entry_count == 100

    def test_small_zsh_history_merged(self, zsh_config, home):
        """Test a tiny ~/.zsh_history triggers a session merge."""
        write(home / ".zsh_history", ": 200:0;pwd\n")
        write(home / ".zsh_sessions" / "A.history", ": 100:0;ls\n")

        history = load_history(config=zsh_config)

        assert history.file_path.endswith("(merged)")
        assert [e.command for e in history.entries] == ["ls", "pwd"]

    def test_sessions_only(self, zsh_config, home):
        """Test sessions are merged when ~/.zsh_history is absent."""
        write(home / ".zsh_sessions" / "A.history", ": 100:0;ls\n")
        history = load_history(config=zsh_config)
        assert history.file_path.endswith("(merged)")
        assert history.entry_count == 1

    def test_small_zsh_history_without_sessions(self, zsh_config, home):
        """Test a tiny ~/.zsh_history is still loaded when nothing merges."""
        canonical = write(home / ".zsh_history", ": 200:0;pwd\n")
        history = load_history(config=zsh_config)
        assert history.file_path == str(canonical)

    def test_fish_via_xdg(self, tmp_path):
        """Test fish history is found under XDG_DATA_HOME."""
        config = LoaderConfig(
            home=tmp_path, shell_env="/usr/bin/fish", xdg_data_home=tmp_path / "xdg"
        )
        write(tmp_path / "xdg" / "fish" / "fish_history", "- cmd: ls\n  when: 1704067200\n")
        history = load_history(config=config)
        assert history.shell == Shell.FISH
        assert history.entries[0].command == "ls"

    def test_invalid_bytes_replaced(self, bash_config, home):
        """Test undecodable bytes do not abort loading."""
        (home / ".bash_history").write_bytes(b"ls\n\xff\xfe weird\npwd\n")
        history = load_history(config=bash_config)
        assert history.entry_count == 3

    def test_unreadable_history_skipped(self, bash_config, home):
        """Test a history that exists but cannot be read falls through."""
        bad = write(home / ".bash_history", "ls\n")
        write(home / ".local" / "share" / "fish" / "fish_history", "- cmd: pwd\n")
        real_read = loader._read_text

        def fake_read(path):
            if path == bad:
                raise PermissionError("denied")
            return real_read(path)

        with patch("cli_wrapped.loader._read_text", side_effect=fake_read):
            history = load_history(config=bash_config)

        assert history.shell == Shell.FISH
        assert [e.command for e in history.entries] == ["pwd"]

    def test_every_history_unreadable(self, bash_config, home):
        """Test HistoryNotFoundError when nothing can be read."""
        write(home / ".bash_history", "ls\n")
        with patch("cli_wrapped.loader._read_text", side_effect=PermissionError("denied")):
            with pytest.raises(HistoryNotFoundError) as exc_info:
                load_history(config=bash_config)
        assert home / ".bash_history" in exc_info.value.tried_paths

    def test_explicit_file_unreadable(self, bash_config, tmp_path):
        """Test an unreadable explicit file raises HistoryNotFoundError."""
        path = write(tmp_path / "hist", "ls\n")
        with patch("cli_wrapped.loader._read_text", side_effect=PermissionError("denied")):
            with pytest.raises(HistoryNotFoundError) as exc_info:
                load_history(Shell.BASH, path, bash_config)

        assert exc_info.value.tried_paths == [path]
        assert isinstance(exc_info.value.__cause__, PermissionError)


class TestParseHistoryFile:
    """Tests for single-file parsing."""

    def test_unsupported_shell(self, tmp_path):
        """Test an unknown dialect raises ValueError."""
        path = write(tmp_path / "h", "ls\n")
        with pytest.raises(ValueError):
            parse_history_file(path, "tcsh")


class TestFilterByYear:
    """Tests for calendar year filtering."""

    def test_keeps_only_that_year(self):
        """Test entries outside the year and undated entries are dropped."""
        history = ParsedHistory(
            entries=(
                entry("in", utc(1718000000)),  # June 2024
                entry("out", utc(1686000000)),  # June 2023
                entry("undated"),
            ),
            shell=Shell.BASH,
            file_path="h",
        )
        filtered = filter_by_year(history, 2024)

        assert [e.command for e in filtered.entries] == ["in"]
        assert filtered.shell == Shell.BASH
        assert filtered.file_path == "h"

    def test_empty_result(self):
        """Test a year without entries yields an empty history."""
        history = ParsedHistory(entries=(entry("undated"),), shell=Shell.ZSH, file_path="h")
        assert filter_by_year(history, 2024).entries == ()
