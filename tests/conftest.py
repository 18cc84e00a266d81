"""Shared pytest fixtures and configuration for the video-downloader test suite.

Guidelines
----------
* No internet access in any test.
* yt-dlp, ffmpeg and clipboard tools are mocked at the subprocess boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state: the app home and the settings file
  are redirected into ``tmp_path`` for every test.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from video_downloader.i18n import set_language


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point every well-known path at a temporary directory."""
    home = tmp_path / "app-home"
    monkeypatch.setenv("VIDEO_DOWNLOADER_HOME", str(home))
    monkeypatch.setenv("VIDEO_DOWNLOADER_SETTINGS", str(tmp_path / "settings.yaml"))
    monkeypatch.delenv("DEBUG", raising=False)
    for var in ("LANG", "LANGUAGE", "LC_ALL"):
        monkeypatch.delenv(var, raising=False)
    set_language("en")
    yield home
    set_language("en")


@pytest.fixture()
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.yaml"
