"""Well-known filesystem locations used across the application."""

from __future__ import annotations

import os
from pathlib import Path

SETTINGS_ENV_VAR = "VIDEO_DOWNLOADER_SETTINGS"
HOME_ENV_VAR = "VIDEO_DOWNLOADER_HOME"


def expand_path(raw: str) -> str:
    """Expand a leading ``~`` to the user's home directory."""
    if raw == "~" or raw.startswith(("~/", "~\\")):
        return str(Path.home()) + raw[1:]
    return raw


def app_home() -> Path:
    """Root directory for downloaded tools and logs (``~/.video-downloader``)."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(expand_path(override))
    return Path.home() / ".video-downloader"


def bin_dir() -> Path:
    """Directory that receives locally installed yt-dlp / ffmpeg binaries."""
    return app_home() / "bin"


def log_dir() -> Path:
    return app_home() / "logs"


def settings_file() -> Path:
    """Location of the YAML settings document."""
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(expand_path(override))
    return Path.home() / ".video-downloader-settings.yaml"
