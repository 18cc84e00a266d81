"""Message catalogs and the :func:`t` lookup helper.

Catalogs are nested dicts addressed with dotted keys
(``"download.enter_url"``).  Lookups fall back to English and finally to
the key itself, so a missing translation never breaks the UI.
"""

from __future__ import annotations

import os
import re
from typing import Any

from video_downloader.i18n import en, ru

AVAILABLE_LANGUAGES: tuple[str, ...] = ("en", "ru")
DEFAULT_LANGUAGE = "en"

_CATALOGS: dict[str, dict[str, Any]] = {
    "en": en.MESSAGES,
    "ru": ru.MESSAGES,
}

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

_current_language: str = DEFAULT_LANGUAGE


def get_system_language() -> str:
    """Guess the UI language from ``LANG`` / ``LANGUAGE`` / ``LC_ALL``."""
    env_lang = (
        os.environ.get("LANG")
        or os.environ.get("LANGUAGE")
        or os.environ.get("LC_ALL")
        or ""
    )
    if "ru" in env_lang.lower():
        return "ru"
    return DEFAULT_LANGUAGE


def is_valid_language(lang: object) -> bool:
    return lang in AVAILABLE_LANGUAGES


def get_language() -> str:
    return _current_language


def set_language(lang: str) -> None:
    """Switch the active catalog; unsupported codes are ignored."""
    global _current_language
    if is_valid_language(lang):
        _current_language = lang


def _lookup(catalog: dict[str, Any], key: str) -> str | None:
    current: Any = catalog
    for part in key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current if isinstance(current, str) else None


def _interpolate(template: str, values: dict[str, Any]) -> str:
    if not values:
        return template

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in values:
            return str(values[name])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


def t(key: str, lang: str | None = None, **values: Any) -> str:
    """Translate *key* into the active (or given) language.

    ``{name}`` placeholders are filled from *values*; placeholders without
    a value are left untouched.
    """
    language = lang if is_valid_language(lang) else _current_language
    text = _lookup(_CATALOGS[language], key)
    if text is None and language != DEFAULT_LANGUAGE:
        text = _lookup(_CATALOGS[DEFAULT_LANGUAGE], key)
    if text is None:
        return key
    return _interpolate(text, values)


__all__: list[str] = [
    "AVAILABLE_LANGUAGES",
    "DEFAULT_LANGUAGE",
    "get_language",
    "get_system_language",
    "is_valid_language",
    "set_language",
    "t",
]
