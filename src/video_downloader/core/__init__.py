"""Core / service layer — business rules and pure data transformations.

Rules
-----
* No ``print()`` calls.
* No subprocesses or network access.
* No imports from ``cli`` or ``infra``.
"""

from video_downloader.core.download_service import DownloadService
from video_downloader.core.metadata_service import MetadataService
from video_downloader.core.models import (
    DependencyPaths,
    DownloadRequest,
    DownloadResult,
    ProgressUpdate,
    Settings,
    VideoInfo,
)
from video_downloader.core.protocols import DownloadObserver, DownloadProvider, MetadataProvider

__all__: list[str] = [
    "DependencyPaths",
    "DownloadObserver",
    "DownloadProvider",
    "DownloadRequest",
    "DownloadResult",
    "DownloadService",
    "MetadataProvider",
    "MetadataService",
    "ProgressUpdate",
    "Settings",
    "VideoInfo",
]
