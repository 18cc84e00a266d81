"""Core download service — runs one yt-dlp invocation per chosen quality.

This service delegates every process launch to a
:class:`~video_downloader.core.protocols.DownloadProvider`.  It is
responsible for:

* Building per-quality arguments and output names.
* Continuing with the next quality when one fails.
* Fetching the cover and description after the media files.
* Measuring the written files.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from video_downloader.core.models import DownloadRequest, DownloadResult, VideoInfo
from video_downloader.core.protocols import DownloadObserver, DownloadProvider, ProgressCallback
from video_downloader.core.quality import (
    AUDIO_QUALITY,
    build_cover_args,
    build_description_args,
    build_download_args,
    output_filename,
    strip_mp4_suffix,
)
from video_downloader.exceptions import DownloadFailedError, VideoDownloaderError

logger = logging.getLogger(__name__)


class DownloadService:
    """Drives the download pipeline for a single video.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`DownloadProvider` protocol.
    """

    def __init__(self, provider: DownloadProvider) -> None:
        self._provider: DownloadProvider = provider

    # ------------------------------------------------------------------
    # Single steps
    # ------------------------------------------------------------------

    def download_quality(
        self,
        info: VideoInfo,
        quality: str,
        request: DownloadRequest,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> DownloadResult:
        """Download one quality and return the measured result.

        Raises
        ------
        DownloadFailedError
            When the download fails for any reason.
        """
        base = strip_mp4_suffix(request.filename)
        filename = output_filename(base, quality)
        fullpath = os.path.join(request.download_path, filename)
        if quality == AUDIO_QUALITY:
            # yt-dlp renames to .mp3 after extraction.
            target = os.path.join(request.download_path, f"{base}.%(ext)s")
        else:
            target = fullpath

        args = build_download_args(
            quality,
            target,
            info.webpage_url,
            browser=request.browser,
            mp3_bitrate=request.mp3_bitrate,
        )
        logger.info("Downloading %s as %s", info.webpage_url, fullpath)
        try:
            self._provider.download(args, progress_callback=progress_callback)
        except VideoDownloaderError:
            raise
        except Exception as exc:
            raise DownloadFailedError(
                f"Unexpected download error: {exc}",
            ) from exc

        size = os.path.getsize(fullpath) if os.path.exists(fullpath) else 0
        return DownloadResult(filename=filename, quality=quality, size_bytes=size)

    def download_cover(self, info: VideoInfo, request: DownloadRequest) -> bool:
        output_base = os.path.join(request.download_path, strip_mp4_suffix(request.filename))
        args = build_cover_args(output_base, info.webpage_url, browser=request.browser)
        return self._provider.run_quiet(args)

    def download_description(self, info: VideoInfo, request: DownloadRequest) -> bool:
        output_base = os.path.join(request.download_path, strip_mp4_suffix(request.filename))
        args = build_description_args(output_base, info.webpage_url, browser=request.browser)
        return self._provider.run_quiet(args)

    # ------------------------------------------------------------------
    # Full pipeline
    # ------------------------------------------------------------------

    def download_all(
        self,
        info: VideoInfo,
        request: DownloadRequest,
        *,
        observer: DownloadObserver | None = None,
    ) -> list[DownloadResult]:
        """Download every requested quality, then the extras.

        A failed quality is reported to *observer* and skipped; the
        returned list holds only the files that were written.
        ``observer.close()`` runs however the pipeline ends, Ctrl+C
        included.

        Raises
        ------
        DownloadFailedError
            When the target directory cannot be created.
        """
        try:
            os.makedirs(request.download_path, exist_ok=True)
        except OSError as exc:
            raise DownloadFailedError(
                f"Could not create {request.download_path}: {exc.strerror or exc}",
                hint="Choose a directory you can write to.",
            ) from exc

        results: list[DownloadResult] = []
        base = strip_mp4_suffix(request.filename)
        try:
            for quality in request.qualities:
                filename = output_filename(base, quality)
                callback = observer.quality_started(quality, filename) if observer else None
                try:
                    result = self.download_quality(
                        info, quality, request, progress_callback=callback,
                    )
                except DownloadFailedError as exc:
                    logger.error("Download of %s (%s) failed: %s", filename, quality, exc)
                    if observer:
                        observer.quality_failed(quality, filename, exc)
                    continue
                results.append(result)
                if observer:
                    observer.quality_finished(result)

            if request.download_cover:
                self._run_extra("cover", self.download_cover, info, request, observer)
            if request.download_description:
                self._run_extra("description", self.download_description, info, request, observer)
        finally:
            if observer:
                observer.close()

        return results

    @staticmethod
    def _run_extra(
        kind: str,
        step: Callable[[VideoInfo, DownloadRequest], bool],
        info: VideoInfo,
        request: DownloadRequest,
        observer: DownloadObserver | None,
    ) -> None:
        if observer:
            observer.extra_started(kind)
        ok = step(info, request)
        if not ok:
            logger.warning("Could not download %s for %s", kind, info.webpage_url)
        if observer:
            observer.extra_finished(kind, ok)
