"""Rich-based progress display for archive downloads.

This module bridges the registry client's ``progress_callback`` with a
Rich :class:`~rich.progress.Progress` bar.  The infra layer only reports
raw byte counts; all rendering happens here.

Design
------
* The :class:`RichProgressHook` manages a Rich Progress context.
* :meth:`__call__` is the callback handed to the sample service.
* Shutdown-safe: if the progress bar is already stopped, calls are
  silently ignored.
"""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

_MAX_LABEL = 50


class RichProgressHook:
    """Callable progress-hook adapter for Rich.

    Usage::

        with RichProgressHook("console", console=error_console) as hook:
            service.download_sample("console", progress_callback=hook)
    """

    def __init__(self, description: str, *, console: Console) -> None:
        self._progress: Progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=False,
        )
        self._description: str = _shorten(description)
        self._task_id: TaskID | None = None
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RichProgressHook:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the Rich progress display."""
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the Rich progress display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    # ------------------------------------------------------------------
    # Hook callback
    # ------------------------------------------------------------------

    def __call__(self, downloaded: int, total: int | None) -> None:
        """Record that *downloaded* of *total* bytes have arrived."""
        if not self._started:
            return

        if self._task_id is None:
            self._task_id = self._progress.add_task(self._description, total=total)

        if total is not None:
            self._progress.update(self._task_id, total=total, completed=downloaded)
        else:
            self._progress.update(self._task_id, completed=downloaded)

    @property
    def downloaded(self) -> int:
        """Bytes reported so far (0 before the first callback)."""
        if self._task_id is None:
            return 0
        return int(self._progress.tasks[self._task_id].completed)


def _shorten(label: str) -> str:
    if len(label) > _MAX_LABEL:
        return label[: _MAX_LABEL - 3] + "..."
    return label
