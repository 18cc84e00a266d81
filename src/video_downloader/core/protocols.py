"""Protocols (interfaces) consumed by the core layer.

These define the contracts the yt-dlp adapter satisfies.  Core code
depends only on these protocols, never on the subprocess wrapper.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from video_downloader.core.models import DownloadResult, ProgressUpdate

ProgressCallback = Callable[[ProgressUpdate], None]


class MetadataProvider(Protocol):
    """Contract for metadata and format-listing backends."""

    def fetch_info(self, url: str) -> dict[str, Any]:
        """Return the raw ``--dump-json`` document for *url*.

        Raises
        ------
        AuthenticationRequiredError
            When the site demands cookies / sign-in.
        MetadataExtractionError
            For every other failure, including the timeout.
        """
        ...  # pragma: no cover

    def list_formats(self, url: str) -> str:
        """Return the ``--list-formats`` table, or ``""`` on failure."""
        ...  # pragma: no cover


class DownloadProvider(Protocol):
    """Contract for the process that actually writes files."""

    def download(
        self,
        args: Sequence[str],
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Run one download, forwarding parsed progress lines.

        Raises
        ------
        DownloadFailedError
            When the tool exits with a non-zero status.
        """
        ...  # pragma: no cover

    def run_quiet(self, args: Sequence[str]) -> bool:
        """Run an auxiliary invocation; report success instead of raising."""
        ...  # pragma: no cover


class DownloadObserver(Protocol):
    """Receives lifecycle events from :meth:`DownloadService.download_all`."""

    def quality_started(self, quality: str, filename: str) -> ProgressCallback | None:
        """Called before each quality; may return a progress callback."""
        ...  # pragma: no cover

    def quality_finished(self, result: DownloadResult) -> None:
        ...  # pragma: no cover

    def quality_failed(self, quality: str, filename: str, error: Exception) -> None:
        ...  # pragma: no cover

    def extra_started(self, kind: str) -> None:
        """*kind* is ``"cover"`` or ``"description"``."""
        ...  # pragma: no cover

    def extra_finished(self, kind: str, ok: bool) -> None:
        ...  # pragma: no cover

    def close(self) -> None:
        """Release any live display; called once the pipeline ends."""
        ...  # pragma: no cover
