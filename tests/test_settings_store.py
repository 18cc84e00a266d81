"""Tests for YAML settings persistence (infra/settings_store.py).

Every test works on a file under ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from video_downloader.core.models import Settings
from video_downloader.exceptions import SettingsError
from video_downloader.infra.settings_store import (
    default_settings,
    load_settings,
    save_settings,
    settings_exist,
)
from video_downloader.utils.paths import settings_file


class TestDefaults:
    def test_missing_file_gives_defaults(self, settings_path: Path) -> None:
        assert load_settings(settings_path) == Settings()

    def test_language_follows_locale(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LANG", "ru_RU.UTF-8")
        assert default_settings().language == "ru"

    def test_env_var_locates_file(self, settings_path: Path) -> None:
        assert settings_file() == settings_path

    def test_exists(self, settings_path: Path) -> None:
        assert not settings_exist(settings_path)
        settings_path.write_text("{}", encoding="utf-8")
        assert settings_exist(settings_path)


class TestRoundTrip:
    def test_save_then_load(self, settings_path: Path) -> None:
        original = Settings(
            default_download_path="~/Videos",
            default_filename="{uploader} - {title}",
            preferred_quality="720p",
            download_cover=False,
            download_description=False,
            debug=True,
            browser="firefox",
            mp3_bitrate=320,
            language="ru",
        )
        assert save_settings(original, settings_path) == settings_path
        assert load_settings(settings_path) == original

    def test_snake_case_keys_written(self, settings_path: Path) -> None:
        save_settings(Settings(), settings_path)
        document = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
        assert list(document) == [
            "default_download_path",
            "default_filename",
            "preferred_quality",
            "download_cover",
            "download_description",
            "debug",
            "browser",
            "mp3_bitrate",
            "language",
        ]

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "settings.yaml"
        save_settings(Settings(), target)
        assert target.exists()

    def test_unicode_preserved(self, settings_path: Path) -> None:
        save_settings(Settings(default_download_path="/home/u/Видео"), settings_path)
        assert "Видео" in settings_path.read_text(encoding="utf-8")

    def test_default_location(self, settings_path: Path) -> None:
        save_settings(Settings(browser="edge"))
        assert load_settings().browser == "edge"
        assert settings_path.exists()


class TestLenientLoading:
    def test_legacy_camel_case_keys(self, settings_path: Path) -> None:
        settings_path.write_text(
            "defaultDownloadPath: /tmp/dl\n"
            "preferredQuality: 1080p\n"
            "downloadCover: false\n"
            "mp3Bitrate: 192\n",
            encoding="utf-8",
        )
        settings = load_settings(settings_path)
        assert settings.default_download_path == "/tmp/dl"
        assert settings.preferred_quality == "1080p"
        assert settings.download_cover is False
        assert settings.mp3_bitrate == 192

    def test_unknown_keys_ignored(self, settings_path: Path) -> None:
        settings_path.write_text("theme: dark\nbrowser: brave\n", encoding="utf-8")
        assert load_settings(settings_path).browser == "brave"

    @pytest.mark.parametrize(
        "line",
        [
            "preferred_quality: 8K",
            "browser: netscape",
            "mp3_bitrate: 100",
            "language: de",
            "debug: 'yes'",
            "mp3_bitrate: true",
            "download_cover: 1",
        ],
    )
    def test_invalid_values_fall_back(self, line: str, settings_path: Path) -> None:
        settings_path.write_text(line + "\n", encoding="utf-8")
        assert load_settings(settings_path) == Settings()

    def test_empty_file(self, settings_path: Path) -> None:
        settings_path.write_text("", encoding="utf-8")
        assert load_settings(settings_path) == Settings()


class TestErrors:
    def test_invalid_yaml(self, settings_path: Path) -> None:
        settings_path.write_text("browser: [unclosed\n", encoding="utf-8")
        with pytest.raises(SettingsError, match="Could not read settings") as exc_info:
            load_settings(settings_path)
        assert exc_info.value.hint is not None

    def test_not_a_mapping(self, settings_path: Path) -> None:
        settings_path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(SettingsError, match="must contain a mapping"):
            load_settings(settings_path)

    def test_unwritable_target(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(SettingsError, match="Could not write"):
            save_settings(Settings(), blocker / "settings.yaml")
