"""YAML persistence for :class:`~video_downloader.core.models.Settings`.

The document is a flat mapping.  Keys are written in snake_case; the
camelCase spelling used by earlier releases is still accepted on load.
Values with the wrong type or outside the allowed choices are replaced by
the default so a hand-edited file can never crash the menu.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

import yaml

from video_downloader.core.models import (
    BITRATE_CHOICES,
    BROWSER_CHOICES,
    QUALITY_CHOICES,
    Settings,
)
from video_downloader.exceptions import SettingsError
from video_downloader.i18n import AVAILABLE_LANGUAGES, get_system_language
from video_downloader.utils.paths import settings_file

logger = logging.getLogger(__name__)

LEGACY_KEYS: dict[str, str] = {
    "defaultDownloadPath": "default_download_path",
    "defaultFilename": "default_filename",
    "preferredQuality": "preferred_quality",
    "downloadCover": "download_cover",
    "downloadDescription": "download_description",
    "mp3Bitrate": "mp3_bitrate",
}

_CHOICES: dict[str, tuple[Any, ...]] = {
    "preferred_quality": QUALITY_CHOICES,
    "browser": BROWSER_CHOICES,
    "mp3_bitrate": BITRATE_CHOICES,
    "language": AVAILABLE_LANGUAGES,
}


def default_settings() -> Settings:
    return Settings(language=get_system_language())


def settings_exist(path: Path | None = None) -> bool:
    return (path or settings_file()).exists()


def load_settings(path: Path | None = None) -> Settings:
    """Read the settings file, merging it over the defaults.

    Raises
    ------
    SettingsError
        When the file exists but is not valid YAML or not a mapping.
    """
    target = path or settings_file()
    settings = default_settings()
    if not target.exists():
        logger.debug("No settings file at %s, using defaults", target)
        return settings

    try:
        with open(target, encoding="utf-8") as fh:
            document = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise SettingsError(
            f"Could not read settings from {target}: {exc}",
            hint="Fix or delete the file to start with default settings.",
        ) from exc

    if not isinstance(document, dict):
        raise SettingsError(
            f"Settings file {target} must contain a mapping.",
            hint="Fix or delete the file to start with default settings.",
        )

    _apply(settings, document)
    logger.debug("Loaded settings from %s", target)
    return settings


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write *settings* and return the path written to."""
    target = path or settings_file()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as fh:
            yaml.safe_dump(asdict(settings), fh, allow_unicode=True, sort_keys=False)
    except OSError as exc:
        raise SettingsError(f"Could not write settings to {target}: {exc}") from exc
    logger.info("Settings saved to %s", target)
    return target


def _apply(settings: Settings, document: dict[str, Any]) -> None:
    defaults = {f.name: getattr(settings, f.name) for f in fields(settings)}
    for raw_key, value in document.items():
        key = LEGACY_KEYS.get(str(raw_key), str(raw_key))
        if key not in defaults:
            logger.debug("Ignoring unknown setting %r", raw_key)
            continue
        if not _is_valid(key, value, defaults[key]):
            logger.warning("Invalid value %r for setting %r, using default", value, key)
            continue
        setattr(settings, key, value)


def _is_valid(key: str, value: Any, default: Any) -> bool:
    # bool is an int subclass; compare exact types.
    if type(value) is not type(default):
        return False
    choices = _CHOICES.get(key)
    return choices is None or value in choices
