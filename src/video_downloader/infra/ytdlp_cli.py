"""Subprocess wrapper around the yt-dlp command-line tool.

This module is the **only** place that launches yt-dlp.  It satisfies
both :class:`~video_downloader.core.protocols.MetadataProvider` and
:class:`~video_downloader.core.protocols.DownloadProvider` structurally.
Every ``OSError``, timeout and non-zero exit status is translated into a
:class:`~video_downloader.exceptions.VideoDownloaderError` subclass here.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from collections import deque
from collections.abc import Sequence
from typing import Any

from video_downloader.core.models import DependencyPaths
from video_downloader.core.output_parser import parse_progress_line
from video_downloader.core.protocols import ProgressCallback
from video_downloader.core.quality import cookie_args
from video_downloader.exceptions import (
    AuthenticationRequiredError,
    DependencyError,
    DownloadFailedError,
    MetadataExtractionError,
    append_ytdlp_upgrade_suggestion,
)

logger = logging.getLogger(__name__)

INFO_TIMEOUT_SECONDS = 30

# Substrings of yt-dlp's stderr that mean "cookies required".
AUTH_SIGNALS: tuple[str, ...] = (
    "Sign in to confirm",
    "cookies-from-browser",
    "Use --cookies",
    "authentication",
)

_ERROR_TAIL_LINES = 20


def debug_enabled(debug: bool = False) -> bool:
    """Debug output is on via the setting or ``DEBUG=true``."""
    return debug or os.environ.get("DEBUG", "").lower() == "true"


def is_auth_error(stderr: str) -> bool:
    return any(signal in stderr for signal in AUTH_SIGNALS)


class YtDlpCli:
    """Runs yt-dlp as a child process, one invocation at a time.

    Parameters
    ----------
    paths:
        Resolved tool locations from :func:`ensure_dependencies`.
    browser:
        Browser to import cookies from; empty for none.
    debug:
        Log every line yt-dlp writes to stderr.
    """

    def __init__(self, paths: DependencyPaths, *, browser: str = "", debug: bool = False) -> None:
        self._paths = paths
        self._browser = browser
        self._debug = debug_enabled(debug)

    def command(self, args: Sequence[str]) -> list[str]:
        """Full argv for an invocation with *args*."""
        cmd = list(self._paths.ytdlp)
        if self._paths.ffmpeg_location:
            cmd.extend(["--ffmpeg-location", self._paths.ffmpeg_location])
        cmd.extend(args)
        return cmd

    # ------------------------------------------------------------------
    # MetadataProvider
    # ------------------------------------------------------------------

    def fetch_info(self, url: str) -> dict[str, Any]:
        """Run ``--dump-json`` and return the decoded document.

        Raises
        ------
        AuthenticationRequiredError
            When stderr asks for cookies or a sign-in.
        MetadataExtractionError
            On a non-zero exit, undecodable output or the timeout.
        DependencyError
            When yt-dlp cannot be started.
        """
        cmd = self.command(["--dump-json", "--no-playlist", *cookie_args(self._browser), url])
        logger.debug("Running %s", cmd)
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=INFO_TIMEOUT_SECONDS,
            )
        except subprocess.TimeoutExpired as exc:
            raise MetadataExtractionError(
                f"yt-dlp timed out after {INFO_TIMEOUT_SECONDS} seconds",
                hint="Check your network connection and try again.",
            ) from exc
        except OSError as exc:
            raise DependencyError(f"Failed to spawn yt-dlp: {exc}") from exc

        self._log_stderr(proc.stderr)

        if proc.returncode != 0:
            if is_auth_error(proc.stderr):
                raise AuthenticationRequiredError(
                    "The site requires authentication.",
                    hint="Choose a browser to import cookies from in Settings.",
                )
            message = "Failed to get video information"
            if self._debug and proc.stderr.strip():
                message = f"{message}: {proc.stderr.strip()}"
            raise MetadataExtractionError(
                message,
                hint=append_ytdlp_upgrade_suggestion("Check that the URL points to a video."),
            )

        try:
            info = json.loads(proc.stdout)
        except json.JSONDecodeError as exc:
            logger.debug("Unparseable yt-dlp output: %r", proc.stdout[:500])
            raise MetadataExtractionError("Failed to parse video information") from exc
        if not isinstance(info, dict):
            raise MetadataExtractionError("yt-dlp returned an unexpected data structure.")
        return info

    def list_formats(self, url: str) -> str:
        """Return the ``--list-formats`` table; never raises."""
        cmd = self.command(["--list-formats", "--no-warnings", *cookie_args(self._browser), url])
        logger.debug("Running %s", cmd)
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            logger.warning("Could not list formats: %s", exc)
            return ""
        self._log_stderr(proc.stderr)
        return proc.stdout or ""

    # ------------------------------------------------------------------
    # DownloadProvider
    # ------------------------------------------------------------------

    def download(
        self,
        args: Sequence[str],
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Run a download, forwarding each progress line as it arrives.

        stderr is merged into stdout so a single pipe is drained; lines
        that are not progress updates are kept for the error message.

        Raises
        ------
        DownloadFailedError
            When yt-dlp exits with a non-zero status or cannot start.
        """
        cmd = self.command(args)
        logger.debug("Running %s", cmd)
        tail: deque[str] = deque(maxlen=_ERROR_TAIL_LINES)
        try:
            process = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as exc:
            raise DownloadFailedError(f"Failed to spawn yt-dlp: {exc}") from exc

        if process.stdout is None:
            process.kill()
            raise DownloadFailedError("Could not read yt-dlp output")
        with process:
            for raw_line in process.stdout:
                line = raw_line.rstrip()
                if not line:
                    continue
                update = parse_progress_line(line)
                if update is not None:
                    if progress_callback is not None:
                        progress_callback(update)
                    continue
                tail.append(line)
                if self._debug:
                    logger.debug("[yt-dlp] %s", line)
            returncode = process.wait()

        if returncode != 0:
            output = "\n".join(tail)
            errors = [line for line in tail if line.startswith("ERROR")]
            raise DownloadFailedError(
                errors[-1] if errors else f"yt-dlp exited with status {returncode}",
                hint="Check the URL, your network, or try a different quality.",
                stderr=output,
            )

    def run_quiet(self, args: Sequence[str]) -> bool:
        """Run an auxiliary invocation (cover, description)."""
        cmd = self.command(args)
        logger.debug("Running %s", cmd)
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            logger.warning("Failed to spawn yt-dlp: %s", exc)
            return False
        self._log_stderr(proc.stderr)
        return proc.returncode == 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _log_stderr(self, stderr: str | None) -> None:
        if not self._debug or not stderr:
            return
        for line in stderr.splitlines():
            logger.debug("[yt-dlp stderr] %s", line)
