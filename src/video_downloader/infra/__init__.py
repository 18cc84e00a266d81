"""Infrastructure layer — external system integration.

This layer wraps every interaction with yt-dlp, ffmpeg, the network,
the clipboard and the filesystem.  Raw ``OSError``/HTTP/subprocess
errors are caught here and re-raised as
:class:`~video_downloader.exceptions.VideoDownloaderError` subclasses.

Rules
-----
* Imports only from ``core``, ``utils``, ``i18n`` and ``exceptions``;
  never from ``cli``.
* ``i18n`` is used for locale detection and for hints shown verbatim
  to the user.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from video_downloader.infra.dependencies import (
    FfmpegStatus,
    detect_ffmpeg,
    ensure_dependencies,
    require_ffmpeg,
)
from video_downloader.infra.settings_store import load_settings, save_settings
from video_downloader.infra.ytdlp_cli import YtDlpCli

__all__: list[str] = [
    "FfmpegStatus",
    "YtDlpCli",
    "detect_ffmpeg",
    "ensure_dependencies",
    "load_settings",
    "require_ffmpeg",
    "save_settings",
]
