"""Tests for local roast generation."""

import pytest

from cli_wrapped.analysis import analyze_entries, analyze_history
from cli_wrapped.models import AnalysisResult, PackageManagerStats
from cli_wrapped.roasts import describe_time_of_day, get_fallback_roasts


class TestDescribeTimeOfDay:
    """Tests for describe_time_of_day."""

    @pytest.mark.parametrize(
        "hour,expected",
        [
            (0, "late night/early morning (vampire hours)"),
            (5, "late night/early morning (vampire hours)"),
            (6, "morning"),
            (11, "morning"),
            (12, "afternoon"),
            (17, "afternoon"),
            (18, "evening"),
            (23, "evening"),
        ],
    )
    def test_boundaries(self, hour, expected):
        """Test each part of the day starts where expected."""
        assert describe_time_of_day(hour) == expected


class TestFallbackRoasts:
    """Tests for get_fallback_roasts."""

    def test_sample_history(self, sample_history):
        """Test roasts reference only aggregate numbers."""
        roasts = get_fallback_roasts(analyze_history(sample_history))

        assert roasts.headline == "The Weekend Shell Tourist"
        assert roasts.top_commands.startswith("You ran 'git' 3 times.")
        assert roasts.git_activity.startswith("1 commits.")
        assert roasts.package_manager == "50% npm, the rest is anyone's guess."
        assert roasts.overall == "10 commands. That's a lot of Enter key abuse."
        assert roasts.struggles.startswith("We all make typos.")

    def test_empty_analysis(self):
        """Test every screen has a roast even without data."""
        roasts = get_fallback_roasts(analyze_entries([]))

        assert roasts.top_commands == "Your command diversity is... interesting."
        assert roasts.git_activity.startswith("No git detected.")
        assert roasts.package_manager.startswith("No package manager preference?")
        assert roasts.struggles.startswith("No typos detected?")
        assert roasts.overall.startswith("0 commands.")

    @pytest.mark.parametrize(
        "total,headline",
        [
            (20000, "The Terminal Velocity Award"),
            (5000, "The Command Line Warrior"),
            (3000, "The Weekend Shell Tourist"),
        ],
    )
    def test_headline_by_volume(self, total, headline):
        """Test the headline depends on command volume."""
        analysis = AnalysisResult(total_commands=total, unique_commands=1)
        assert get_fallback_roasts(analysis).headline == headline

    def test_loyal_package_manager(self):
        """Test a dominant package manager is called out."""
        analysis = AnalysisResult(
            total_commands=10,
            unique_commands=1,
            package_managers=(
                PackageManagerStats("pnpm", 9, 90.0),
                PackageManagerStats("npm", 1, 10.0),
            ),
        )
        roasts = get_fallback_roasts(analysis)
        assert roasts.package_manager == "90% loyal to pnpm. That's called brand loyalty."

    @pytest.mark.parametrize("hour", [22, 23, 0, 3])
    def test_late_night(self, hour):
        """Test late peak hours get the overtime roast."""
        analysis = AnalysisResult(total_commands=1, unique_commands=1, peak_hour=hour)
        assert "overtime" in get_fallback_roasts(analysis).time_patterns

    def test_daytime(self):
        """Test daytime peaks mention the hour."""
        analysis = AnalysisResult(total_commands=1, unique_commands=1, peak_hour=14)
        assert get_fallback_roasts(analysis).time_patterns == (
            "Peak productivity at 14:00. Your coffee knows."
        )

    def test_large_counts_grouped(self):
        """Test large numbers use thousands separators."""
        analysis = AnalysisResult(total_commands=12345, unique_commands=1)
        assert get_fallback_roasts(analysis).overall.startswith("12,345 commands.")
