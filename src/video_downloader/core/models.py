"""Domain models for video-downloader.

:class:`Settings` is the only mutable record: the settings menu edits it
in place before it is persisted.  Everything else is a frozen value
object with no behaviour beyond data access and small derived fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Allowed setting values
# ---------------------------------------------------------------------------

QUALITY_CHOICES: tuple[str, ...] = ("highest", "4K", "1080p", "720p", "480p", "mp3")
BROWSER_CHOICES: tuple[str, ...] = ("", "chrome", "firefox", "safari", "edge", "brave", "opera")
BITRATE_CHOICES: tuple[int, ...] = (64, 96, 128, 192, 256, 320)


# ---------------------------------------------------------------------------
# User settings
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Settings:
    """User preferences persisted between runs."""

    default_download_path: str = ""
    """Target directory; empty means the current working directory."""

    default_filename: str = ""
    """Filename template; empty means the video title."""

    preferred_quality: str = "highest"
    download_cover: bool = True
    download_description: bool = True
    debug: bool = False

    browser: str = ""
    """Browser to import cookies from (``--cookies-from-browser``)."""

    mp3_bitrate: int = 128
    """Audio bitrate in kbps for MP3 extraction."""

    language: str = "en"


# ---------------------------------------------------------------------------
# Video metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VideoInfo:
    """The subset of ``yt-dlp --dump-json`` output the UI needs."""

    id: str
    title: str
    uploader: str
    upload_date: str
    """``YYYYMMDD`` as reported by yt-dlp, or empty."""

    description: str
    thumbnail: str
    webpage_url: str
    duration: int | None = None


# ---------------------------------------------------------------------------
# Tool output
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProgressUpdate:
    """One parsed ``[download]`` progress line."""

    percent: float
    total_bytes: float
    speed: str
    """Speed exactly as printed, e.g. ``"1.23MiB/s"``."""

    eta: str | None = None

    @property
    def downloaded_bytes(self) -> float:
        return self.percent / 100 * self.total_bytes


@dataclass(frozen=True, slots=True)
class DownloadResult:
    """A file that was written successfully."""

    filename: str
    quality: str
    size_bytes: int

    @property
    def size_mb(self) -> float:
        return round(self.size_bytes / (1024 * 1024), 2)


@dataclass(frozen=True, slots=True)
class DownloadRequest:
    """Everything the user chose in the download flow."""

    filename: str
    download_path: str
    qualities: tuple[str, ...]
    download_cover: bool = False
    download_description: bool = False
    browser: str = ""
    mp3_bitrate: int = 128


# ---------------------------------------------------------------------------
# External tools
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DependencyPaths:
    """Resolved locations of the external tools."""

    ytdlp: tuple[str, ...]
    """Command prefix, e.g. ``("yt-dlp",)`` or ``(python, "-m", "yt_dlp")``."""

    ffmpeg: str = "ffmpeg"
    ffmpeg_found: bool = False
    ffmpeg_location: str | None = field(default=None)
    """Set only when ffmpeg lives outside PATH (passed as ``--ffmpeg-location``)."""
