"""Interactive settings editor and the "Install globally" sub-flow.

Edits are applied to the in-memory :class:`Settings` immediately; only
"Save" writes them to disk.  Cancelling a single field returns to the
settings list, cancelling the list itself returns to the main menu.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from video_downloader.cli.console import console, escape, print_error
from video_downloader.cli.prompts import ask_select, ask_text, ask_yes_no
from video_downloader.core.models import BITRATE_CHOICES, BROWSER_CHOICES, Settings
from video_downloader.exceptions import InstallError, PromptCancelled
from video_downloader.i18n import AVAILABLE_LANGUAGES, set_language, t
from video_downloader.infra import global_install
from video_downloader.infra.settings_store import save_settings
from video_downloader.utils.log import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_ALIAS = "vd"

SETTING_KEYS: tuple[str, ...] = (
    "default_download_path",
    "default_filename",
    "preferred_quality",
    "download_cover",
    "download_description",
    "debug",
    "browser",
    "mp3_bitrate",
    "language",
)


# ---------------------------------------------------------------------------
# Choice lists
# ---------------------------------------------------------------------------

def quality_choices() -> list[tuple[str, str]]:
    return [
        (t("qualities.highest"), "highest"),
        ("4K", "4K"),
        ("1080p", "1080p"),
        ("720p", "720p"),
        ("480p", "480p"),
        (t("qualities.mp3"), "mp3"),
    ]


def browser_choices() -> list[tuple[str, str]]:
    return [
        (t("browsers.none") if not name else name.capitalize(), name)
        for name in BROWSER_CHOICES
    ]


def bitrate_choices() -> list[tuple[str, int]]:
    return [(t(f"bitrates.{rate}"), rate) for rate in BITRATE_CHOICES]


def language_choices() -> list[tuple[str, str]]:
    return [(t(f"language.{lang}"), lang) for lang in AVAILABLE_LANGUAGES]


def _display_value(settings: Settings, key: str) -> str:
    value = getattr(settings, key)
    if isinstance(value, bool):
        return t("common.yes") if value else t("common.no")
    if key == "preferred_quality" and value in ("highest", "mp3"):
        return t(f"qualities.{value}")
    if key == "browser" and not value:
        return t("browsers.none")
    if key == "mp3_bitrate":
        return f"{value} kbps"
    if key == "language":
        return t(f"language.{value}")
    return str(value) if value else "-"


# ---------------------------------------------------------------------------
# Field editors
# ---------------------------------------------------------------------------

def _edit_download_path(settings: Settings) -> None:
    settings.default_download_path = ask_text(
        t("download.enter_path"),
        default=settings.default_download_path,
    ).strip()


def _edit_filename(settings: Settings) -> None:
    console.print(f"[dim]{escape(t('settings.filename_hint'))}[/dim]")
    settings.default_filename = ask_text(
        t("settings.default_filename"),
        default=settings.default_filename,
    ).strip()


def _edit_quality(settings: Settings) -> None:
    settings.preferred_quality = ask_select(
        t("settings.preferred_quality"),
        quality_choices(),
        default=settings.preferred_quality,
    )


def _edit_cover(settings: Settings) -> None:
    settings.download_cover = ask_yes_no(
        t("settings.download_cover") + "?", default=settings.download_cover
    )


def _edit_description(settings: Settings) -> None:
    settings.download_description = ask_yes_no(
        t("settings.download_description") + "?", default=settings.download_description
    )


def _edit_debug(settings: Settings) -> None:
    settings.debug = ask_yes_no(t("settings.debug") + "?", default=settings.debug)
    configure_logging(debug=settings.debug)


def _edit_browser(settings: Settings) -> None:
    settings.browser = ask_select(
        t("settings.browser"), browser_choices(), default=settings.browser
    )


def _edit_bitrate(settings: Settings) -> None:
    settings.mp3_bitrate = ask_select(
        t("settings.mp3_bitrate"), bitrate_choices(), default=settings.mp3_bitrate
    )


def _edit_language(settings: Settings) -> None:
    settings.language = ask_select(
        t("language.select"), language_choices(), default=settings.language
    )
    set_language(settings.language)


EDITORS: dict[str, Callable[[Settings], None]] = {
    "default_download_path": _edit_download_path,
    "default_filename": _edit_filename,
    "preferred_quality": _edit_quality,
    "download_cover": _edit_cover,
    "download_description": _edit_description,
    "debug": _edit_debug,
    "browser": _edit_browser,
    "mp3_bitrate": _edit_bitrate,
    "language": _edit_language,
}


# ---------------------------------------------------------------------------
# Menu loop
# ---------------------------------------------------------------------------

def _menu_choices(settings: Settings) -> list[tuple[str, str]]:
    choices = [
        (f"{t(f'settings.{key}')}: {_display_value(settings, key)}", key)
        for key in SETTING_KEYS
    ]
    choices.append((t("settings.install_globally"), "install"))
    choices.append((t("settings.save"), "save"))
    return choices


def run_settings_menu(settings: Settings, *, settings_path: Path | None = None) -> bool:
    """Edit *settings* in place until the user saves or backs out.

    Returns
    -------
    bool
        ``True`` when the settings were written to disk.

    Raises
    ------
    SettingsError
        When saving fails.
    """
    last = SETTING_KEYS[0]
    while True:
        try:
            choice = ask_select(t("settings.title"), _menu_choices(settings), default=last)
        except PromptCancelled:
            return False

        if choice == "save":
            path = save_settings(settings, settings_path)
            console.print(f"[green]✅ {escape(t('settings.saved', path=str(path)))}[/green]")
            return True

        last = choice
        try:
            if choice == "install":
                run_global_install()
            else:
                EDITORS[choice](settings)
        except PromptCancelled:
            continue


# ---------------------------------------------------------------------------
# Install globally
# ---------------------------------------------------------------------------

def _confirm_overwrite(alias: str) -> bool:
    target = global_install.target_path(alias)
    if not (target.exists() or target.is_symlink()):
        return True
    return ask_yes_no(t("install.overwrite"), default=False)


def run_global_install() -> None:
    """Expose the launcher as a short command.

    Raises
    ------
    PromptCancelled
        When any prompt is cancelled.
    """
    if not global_install.is_supported():
        console.print(f"[yellow]{t('install.windows_not_supported')}[/yellow]")
        return

    try:
        launcher = global_install.find_launcher()
    except InstallError as exc:
        print_error(exc)
        return

    method = ask_select(
        t("install.select_method"),
        [
            (t("install.symlink"), "symlink"),
            (t("install.copy"), "copy"),
            (t("install.add_to_path"), "path"),
        ],
    )
    alias = ask_text(t("install.enter_alias"), default=DEFAULT_ALIAS).strip()
    if not alias:
        raise PromptCancelled(t("common.cancelled"))

    try:
        if method == "path":
            config, changed = global_install.add_to_path(launcher, alias)
            key = "install.path_updated" if changed else "install.already_in_path"
            console.print(f"[green]✅ {escape(t(key, config=str(config)))}[/green]")
            console.print(
                f"[dim]{escape(t('install.restart_terminal', config=str(config)))}[/dim]"
            )
            return

        if not _confirm_overwrite(alias):
            return

        with console.status(t("common.loading")):
            if method == "symlink":
                target = global_install.install_symlink(launcher, alias, overwrite=True)
            else:
                target = global_install.install_copy(launcher, alias, overwrite=True)
    except InstallError as exc:
        logger.debug("Global install failed: %s", exc)
        print_error(exc)
        return

    if method == "symlink":
        message = t("install.symlink_created", path=str(target), target=str(launcher))
    else:
        message = t("install.copy_created", path=str(target))
    console.print(f"[green]✅ {escape(message)}[/green]")
