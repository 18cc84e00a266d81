"""Console helpers.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``)
stay functional even in a broken environment where it cannot be
imported.
"""

from __future__ import annotations

import sys
from typing import Any

from video_downloader.exceptions import DependencyError, VideoDownloaderError
from video_downloader.i18n import t

_rich_console: Any = None


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` or raise ``DependencyError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise DependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Return the shared Rich console (created on first use, on stderr)."""
    global _rich_console
    if _rich_console is None:
        console_class = _load_rich_console_class()
        _rich_console = console_class(stderr=True, highlight=False)
    return _rich_console


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with a plain-stderr fallback."""

    def print(self, *objects: object) -> None:
        try:
            rich_console = get_rich_console()
        except DependencyError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)

    def status(self, message: str) -> Any:
        """Spinner context manager (``rich.status.Status``)."""
        return get_rich_console().status(message, spinner="dots")


console = _ConsoleProxy()


def escape(text: str) -> str:
    """Escape Rich markup in user-supplied text (titles, filenames)."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return text
    return rich_escape(text)


def print_error(exc: VideoDownloaderError) -> None:
    """Render a library error and its hint without leaving the menu."""
    console.print(f"[bold red]{escape(t('common.error', message=str(exc)))}[/bold red]")
    if exc.hint:
        console.print(f"[yellow]{escape(exc.hint)}[/yellow]")
