from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from ..domain.interfaces import ProgressReporter


class ScrollProgress(ProgressReporter):
    """Terminal progress bar for a scroll export, rendered on stderr."""

    def __init__(self, console: Optional[Console] = None, refresh_per_second: float = 4) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            TextColumn("Logz.io Search Export"),
            BarColumn(complete_style="cyan"),
            TaskProgressColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TextColumn("ETA"),
            TimeRemainingColumn(),
            TextColumn("Speed: {task.fields[speed]} logs/s"),
            console=self._console,
            refresh_per_second=refresh_per_second,
            transient=False,
        )
        self._task: Optional[TaskID] = None
        self.running = False

    def start(self, total: int) -> None:
        if self.running:
            return
        self._progress.start()
        self._task = self._progress.add_task("export", total=max(int(total), 0), speed=0)
        self.running = True

    def update(self, offset: int, speed: int) -> None:
        if not self.running or self._task is None:
            return
        self._progress.update(self._task, completed=offset, speed=speed)

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        self._progress.stop()
