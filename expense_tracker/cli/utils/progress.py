"""Stage progress display for multi-step CLI commands."""

from typing import List, Optional

import click


class ProgressTracker:
    """Track progress through the named stages of a command.

    Example:
        >>> tracker = ProgressTracker(["Load records", "Write file"])
        >>> tracker.get_current_message()
        '[1/2] Load records'
    """

    def __init__(self, stages: List[str]):
        self.stages = stages
        self.total_stages = len(stages)
        self.current_stage = 0

    def get_current_message(self) -> str:
        if self.current_stage < self.total_stages:
            return (
                f"[{self.current_stage + 1}/{self.total_stages}] "
                f"{self.stages[self.current_stage]}"
            )
        return f"[{self.total_stages}/{self.total_stages}] Complete"

    def start(self) -> None:
        """Echo the current stage."""
        click.echo(self.get_current_message())

    def advance(self, message: Optional[str] = None) -> None:
        """Finish the current stage, optionally echoing a detail line."""
        if message:
            click.echo(f"  {message}")
        self.current_stage += 1

    def is_complete(self) -> bool:
        return self.current_stage >= self.total_stages
