"""Custom exception hierarchy for video-downloader.

Everything that crosses a layer boundary inherits from
:class:`VideoDownloaderError`.  Raw subprocess, OS and HTTP errors never
propagate beyond the infrastructure layer; they are caught there and
re-raised as one of the typed subclasses below.

Hierarchy
---------
VideoDownloaderError
├── InvalidURLError
├── MetadataExtractionError
│   └── AuthenticationRequiredError
├── FormatSelectionError
├── DownloadFailedError
├── DependencyError
│   └── FfmpegNotFoundError
├── SettingsError
├── InstallError
├── ClipboardError
└── PromptCancelled
"""

from __future__ import annotations


class VideoDownloaderError(Exception):
    """Base exception for all video-downloader errors.

    Every user-visible error condition maps to a subclass so that the
    CLI can render a clean message instead of a stack trace.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- URL validation --------------------------------------------------------

class InvalidURLError(VideoDownloaderError):
    """Raised when the provided URL fails validation."""


# --- Metadata / extraction -------------------------------------------------

class MetadataExtractionError(VideoDownloaderError):
    """Raised when yt-dlp fails to return video metadata."""


class AuthenticationRequiredError(MetadataExtractionError):
    """Raised when the site refuses anonymous access (bot check, login)."""


# --- Format handling -------------------------------------------------------

class FormatSelectionError(VideoDownloaderError):
    """Raised when no downloadable quality can be offered."""


# --- Download --------------------------------------------------------------

class DownloadFailedError(VideoDownloaderError):
    """Raised when a yt-dlp download exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message, hint=hint)
        self.stderr: str = stderr


# --- Environment / tooling -------------------------------------------------

class DependencyError(VideoDownloaderError):
    """Raised when an external tool cannot be found, run or installed."""


class FfmpegNotFoundError(DependencyError):
    """Raised when ffmpeg cannot be located."""


class SettingsError(VideoDownloaderError):
    """Raised when the settings file cannot be read or written."""


class InstallError(VideoDownloaderError):
    """Raised when installing the launcher globally fails."""


class ClipboardError(VideoDownloaderError):
    """Raised when no clipboard utility accepted the text."""


# --- Interaction -----------------------------------------------------------

class PromptCancelled(VideoDownloaderError):
    """Raised when the user dismisses an interactive prompt (Esc / Ctrl+C)."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    yt-dlp -U",
        )
    )
