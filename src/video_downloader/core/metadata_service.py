"""Core metadata service — URL validation, info parsing, size lookup.

Depends on a :class:`~video_downloader.core.protocols.MetadataProvider`
injected at construction time, keeping the core free of subprocess code.

Guarantees
----------
* Pure orchestration — no I/O, no ``print()``.
* Only :class:`~video_downloader.exceptions.VideoDownloaderError`
  subclasses escape.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from video_downloader.core.models import VideoInfo
from video_downloader.core.output_parser import parse_format_sizes
from video_downloader.core.protocols import MetadataProvider
from video_downloader.exceptions import (
    InvalidURLError,
    MetadataExtractionError,
    VideoDownloaderError,
)

logger = logging.getLogger(__name__)


class MetadataService:
    """Stateless service that fetches video information.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`MetadataProvider` protocol.
    """

    def __init__(self, provider: MetadataProvider) -> None:
        self._provider: MetadataProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch_video_info(self, url: str) -> VideoInfo:
        """Fetch and parse the metadata of a single video.

        Raises
        ------
        InvalidURLError
            If *url* is empty or not an HTTP(S) URL.
        AuthenticationRequiredError
            If the site requires cookies.
        MetadataExtractionError
            If the backend fails to return metadata.
        """
        url = self.validate_url(url)
        try:
            info = self._provider.fetch_info(url)
        except VideoDownloaderError:
            raise
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected provider error: {exc}",
            ) from exc

        if not info:
            raise MetadataExtractionError("Video info is empty.")
        parsed = self.parse_video_info(info)
        if not parsed.webpage_url:
            parsed = replace(parsed, webpage_url=url)
        logger.debug("Fetched info for %s: %r", url, parsed.title)
        return parsed

    def get_format_sizes(self, url: str) -> dict[str, str]:
        """Return ``{quality: size}`` for every quality the video offers."""
        url = self.validate_url(url)
        try:
            listing = self._provider.list_formats(url)
        except VideoDownloaderError:
            raise
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected provider error: {exc}",
            ) from exc
        sizes = parse_format_sizes(listing)
        logger.debug("Format sizes for %s: %s", url, sizes)
        return sizes

    # ------------------------------------------------------------------
    # Validation and parsing (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def validate_url(url: str) -> str:
        """Return the stripped URL or raise :class:`InvalidURLError`."""
        stripped = url.strip()
        if not stripped:
            raise InvalidURLError("URL must not be empty.")
        if not stripped.startswith(("http://", "https://")):
            raise InvalidURLError(
                f"Invalid URL: {stripped}",
                hint="URL must start with http:// or https://",
            )
        return stripped

    @staticmethod
    def parse_video_info(info: dict[str, Any]) -> VideoInfo:
        """Convert a raw ``--dump-json`` dict into a :class:`VideoInfo`."""
        raw_duration = info.get("duration")
        duration: int | None = None
        if isinstance(raw_duration, (int, float)) and not isinstance(raw_duration, bool):
            duration = int(raw_duration)
        return VideoInfo(
            id=str(info.get("id") or ""),
            title=str(info.get("title") or "video"),
            uploader=str(info.get("uploader") or ""),
            upload_date=str(info.get("upload_date") or ""),
            description=str(info.get("description") or ""),
            thumbnail=str(info.get("thumbnail") or ""),
            webpage_url=str(info.get("webpage_url") or info.get("original_url") or ""),
            duration=duration,
        )
