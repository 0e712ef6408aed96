"""Unit tests for CLI progress indicators."""

import click
from click.testing import CliRunner

from expense_tracker.cli.utils.progress import ProgressTracker


class TestProgressTracker:
    """Test suite for ProgressTracker."""

    def test_progress_tracker_initialization(self):
        """Test that ProgressTracker initializes with stages."""
        tracker = ProgressTracker(["Load records", "Write file"])
        assert tracker.total_stages == 2
        assert tracker.current_stage == 0

    def test_progress_tracker_get_current_message(self):
        """Test getting current stage message."""
        tracker = ProgressTracker(["Load records", "Write file"])
        assert tracker.get_current_message() == "[1/2] Load records"
        tracker.advance()
        assert tracker.get_current_message() == "[2/2] Write file"
        tracker.advance()
        assert tracker.get_current_message() == "[2/2] Complete"

    def test_progress_tracker_is_complete(self):
        """Test checking if all stages are complete."""
        tracker = ProgressTracker(["Load records"])
        assert not tracker.is_complete()
        tracker.advance("Done")
        assert tracker.is_complete()

    def test_output(self):
        """Test what start and advance print."""

        @click.command()
        def staged():
            tracker = ProgressTracker(["Load records", "Write file"])
            tracker.start()
            tracker.advance("3 project(s)")

        result = CliRunner().invoke(staged)
        assert result.output == "[1/2] Load records\n  3 project(s)\n"
