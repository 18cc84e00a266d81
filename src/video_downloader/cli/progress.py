"""Rich-based progress display driven by parsed yt-dlp output.

The infra layer turns each ``[download]`` line into a
:class:`~video_downloader.core.models.ProgressUpdate`; this module
renders those updates with a Rich :class:`~rich.progress.Progress` bar.

Design
------
* :class:`RichProgressHook` owns one Progress context per quality.
* :meth:`RichProgressHook.__call__` is the callback passed down to
  :meth:`YtDlpCli.download`.
* A merged download (video + audio) reports two streams; a drop in the
  percentage starts a fresh task for the second stream.
* :class:`RichDownloadObserver` reacts to
  :meth:`DownloadService.download_all` lifecycle events.
"""

from __future__ import annotations

from typing import Any

from video_downloader.cli.console import console, escape, get_rich_console
from video_downloader.core.formatting import (
    format_bytes,
    progress_bar,
    quality_label,
    truncate_title,
)
from video_downloader.core.models import DownloadResult, ProgressUpdate, VideoInfo
from video_downloader.core.protocols import ProgressCallback
from video_downloader.exceptions import DependencyError
from video_downloader.i18n import t


def _load_progress_columns() -> dict[str, Any]:
    try:
        from rich.progress import (
            BarColumn,
            DownloadColumn,
            Progress,
            TextColumn,
            TimeRemainingColumn,
        )
    except ModuleNotFoundError as exc:
        raise DependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return {
        "BarColumn": BarColumn,
        "DownloadColumn": DownloadColumn,
        "Progress": Progress,
        "TextColumn": TextColumn,
        "TimeRemainingColumn": TimeRemainingColumn,
    }


class RichProgressHook:
    """Callable progress adapter for Rich.

    Usage::

        with RichProgressHook("[1080P]") as hook:
            cli.download(args, progress_callback=hook)
    """

    def __init__(self, description: str = "") -> None:
        cols = _load_progress_columns()
        self._progress: Any = cols["Progress"](
            cols["TextColumn"]("[bold blue]{task.description}"),
            cols["BarColumn"](),
            cols["TextColumn"]("{task.percentage:>5.1f}%"),
            cols["DownloadColumn"](),
            cols["TextColumn"]("[green]{task.fields[speed]}"),
            cols["TimeRemainingColumn"](),
            console=get_rich_console(),
            transient=False,
        )
        self._description = description
        self._task_id: Any = None
        self._last_percent: float = 0.0
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
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the Rich progress display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    @property
    def started(self) -> bool:
        return self._started

    @property
    def last_percent(self) -> float:
        """Percentage of the most recent update (0 before the first one)."""
        return self._last_percent

    # ------------------------------------------------------------------
    # Callback
    # ------------------------------------------------------------------

    def __call__(self, update: ProgressUpdate) -> None:
        if not self._started:
            return

        if self._task_id is None or update.percent < self._last_percent:
            self._task_id = self._progress.add_task(
                self._description,
                total=update.total_bytes or None,
                speed=update.speed,
            )

        self._progress.update(
            self._task_id,
            total=update.total_bytes or None,
            completed=update.downloaded_bytes,
            speed=update.speed,
        )
        self._last_percent = update.percent


class RichDownloadObserver:
    """Prints per-quality headers, progress bars and result lines."""

    def __init__(self, info: VideoInfo, sizes: dict[str, str] | None = None) -> None:
        self._title = escape(truncate_title(info.title))
        self._sizes = sizes or {}
        self._hook: RichProgressHook | None = None
        self._status: Any = None

    def quality_started(self, quality: str, filename: str) -> ProgressCallback | None:
        label = quality_label(quality)
        header = f"[bold]{label}[/bold] {self._title}"
        size = self._sizes.get(quality)
        if size:
            header += f" // {escape(size)}"
        console.print(header)
        self._hook = RichProgressHook(escape(label))
        self._hook.start()
        return self._hook

    def _stop_hook(self) -> None:
        if self._hook is not None:
            self._hook.stop()
            self._hook = None

    def quality_finished(self, result: DownloadResult) -> None:
        self._stop_hook()
        console.print(
            "[green]✅ "
            + t(
                "download.file_saved",
                filename=escape(result.filename),
                quality=result.quality,
                size=format_bytes(result.size_bytes),
            )
            + "[/green]"
        )

    def quality_failed(self, quality: str, filename: str, error: Exception) -> None:
        reached = self._hook.last_percent if self._hook is not None else 0.0
        self._stop_hook()
        console.print(f"[red]❌ {t('download.file_failed', filename=escape(filename))}[/red]")
        if reached > 0:
            console.print(f"[dim]{progress_bar(reached)} {reached:.1f}%[/dim]")
        console.print(f"[dim]{escape(str(error))}[/dim]")

    def extra_started(self, kind: str) -> None:
        self._status = console.status(t(f"download.downloading_{kind}"))
        self._status.start()

    def _stop_status(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def extra_finished(self, kind: str, ok: bool) -> None:
        self._stop_status()
        if ok:
            console.print(f"[green]✅ {t(f'download.{kind}_downloaded')}[/green]")
        else:
            console.print(f"[yellow]⚠ {t('download.file_failed', filename=kind)}[/yellow]")

    def close(self) -> None:
        """Stop whatever display is still live (idempotent)."""
        self._stop_hook()
        self._stop_status()


class InstallProgress:
    """Byte-level bar for tool downloads in :func:`ensure_dependencies`.

    One task per tool; :meth:`set_tool` switches the label.
    """

    def __init__(self) -> None:
        cols = _load_progress_columns()
        self._progress: Any = cols["Progress"](
            cols["TextColumn"]("[bold cyan]{task.description}"),
            cols["BarColumn"](),
            cols["DownloadColumn"](),
            console=get_rich_console(),
            transient=True,
        )
        self._tool = ""
        self._tasks: dict[str, Any] = {}
        self._started = False

    def __enter__(self) -> InstallProgress:
        self._progress.start()
        self._started = True
        return self

    def __exit__(self, *_args: object) -> None:
        if self._started:
            self._progress.stop()
            self._started = False

    def set_tool(self, tool: str) -> None:
        self._tool = tool

    def __call__(self, received: int, total: int | None) -> None:
        if not self._started:
            return
        task_id = self._tasks.get(self._tool)
        if task_id is None:
            task_id = self._progress.add_task(self._tool, total=total)
            self._tasks[self._tool] = task_id
        self._progress.update(task_id, total=total, completed=received)
