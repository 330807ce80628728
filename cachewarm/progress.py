"""Progress reporting of the number of paths that have been warmed up."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class WarmupProgress:
    """
    Progress bar counting warmed up paths, rendered to stderr.

    In quiet mode nothing is rendered, but the count is still tracked so that it can be
    reported afterwards.
    """

    def __init__(
        self, total: int, quiet: bool = False, console: Optional[Console] = None
    ) -> None:
        """Create a progress bar for the given total number of paths."""
        self.total = total
        self.completed = 0

        self._console = console or Console(stderr=True)
        self._quiet = quiet or not self._console.is_terminal

        self._progress: Optional[Progress] = None
        self._task: Optional[TaskID] = None

    def __enter__(self) -> WarmupProgress:
        if not self._quiet:
            self._progress = Progress(
                TextColumn("{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=self._console,
                transient=False,
            )
            self._progress.start()
            self._task = self._progress.add_task("Warmed up paths", total=self.total)

        return self

    def __exit__(self, *exc_info) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

    def advance(self, count: int) -> None:
        """Count the given number of paths as warmed up."""
        self.completed += count

        if self._progress is not None and self._task is not None:
            self._progress.update(self._task, completed=self.completed)

    def __call__(self, count: int) -> None:
        self.advance(count)
