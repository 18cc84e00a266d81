"""Interactive session: first-run language prompt, tool setup, main menu."""

from __future__ import annotations

import logging
from pathlib import Path

from video_downloader.cli.banner import show_banner
from video_downloader.cli.console import console, print_error
from video_downloader.cli.download_flow import run_download_flow
from video_downloader.cli.progress import InstallProgress
from video_downloader.cli.prompts import ask_select
from video_downloader.cli.settings_menu import run_settings_menu
from video_downloader.core.models import DependencyPaths, Settings
from video_downloader.exceptions import DependencyError, PromptCancelled, VideoDownloaderError
from video_downloader.i18n import (
    AVAILABLE_LANGUAGES,
    DEFAULT_LANGUAGE,
    get_system_language,
    set_language,
    t,
)
from video_downloader.infra.dependencies import ensure_dependencies
from video_downloader.infra.settings_store import settings_exist

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Start-up
# ---------------------------------------------------------------------------

def ask_language_on_first_run(settings: Settings, *, settings_path: Path | None = None) -> None:
    """Pick the UI language when no settings file exists yet.

    A supported non-English system locale is adopted silently; otherwise
    the user is asked.  Cancelling keeps English.
    """
    if settings_exist(settings_path):
        return

    system_lang = get_system_language()
    if system_lang != DEFAULT_LANGUAGE:
        settings.language = system_lang
        set_language(system_lang)
        return

    try:
        choice = ask_select(
            t("language.first_run"),
            [(t(f"language.{lang}", lang=lang), lang) for lang in AVAILABLE_LANGUAGES],
            default=DEFAULT_LANGUAGE,
        )
    except PromptCancelled:
        return
    settings.language = choice
    set_language(choice)


def prepare_dependencies(*, install: bool = True) -> DependencyPaths:
    """Locate or install yt-dlp and ffmpeg, rendering install progress.

    Raises
    ------
    DependencyError
        When yt-dlp cannot be made available.
    """
    with InstallProgress() as progress:

        def on_status(tool: str, stage: str) -> None:
            progress.set_tool(tool)
            console.print(f"[cyan]{t(f'dependencies.{stage}', name=tool)}[/cyan]")

        paths = ensure_dependencies(install=install, on_status=on_status, on_progress=progress)

    if paths.ytdlp[1:2] == ("-m",):
        console.print(f"[dim]{t('dependencies.using_module')}[/dim]")
    if not paths.ffmpeg_found:
        console.print(f"[yellow]⚠ {t('dependencies.ffmpeg_not_found')}[/yellow]")
    logger.debug("Resolved tools: %s", paths)
    return paths


# ---------------------------------------------------------------------------
# Main menu
# ---------------------------------------------------------------------------

def main_menu(settings: Settings, paths: DependencyPaths, *, settings_path: Path | None = None) -> None:
    """Loop until Exit or cancel; errors inside an entry return here."""
    while True:
        try:
            choice = ask_select(
                t("common.select_option"),
                [
                    (t("menu.download_video"), "download"),
                    (t("menu.settings"), "settings"),
                    (t("menu.exit"), "exit"),
                ],
            )
        except PromptCancelled:
            break

        if choice == "exit":
            break
        if choice == "settings":
            try:
                run_settings_menu(settings, settings_path=settings_path)
            except VideoDownloaderError as exc:
                print_error(exc)
            continue
        run_download_flow(settings, paths)

    console.print(f"👋 {t('app.goodbye')}")


def run_interactive(
    settings: Settings,
    *,
    settings_path: Path | None = None,
    language_forced: bool = False,
) -> None:
    """Full interactive session: language, banner, tools, menu.

    *language_forced* is set when the language came from ``--lang``; the
    first-run detection is skipped then.

    Raises
    ------
    DependencyError
        When yt-dlp is unavailable; the caller turns it into exit 1.
    """
    if not language_forced:
        ask_language_on_first_run(settings, settings_path=settings_path)
    set_language(settings.language)
    show_banner()
    try:
        paths = prepare_dependencies()
    except DependencyError:
        console.print(f"[bold red]{t('dependencies.init_failed')}[/bold red]")
        raise
    main_menu(settings, paths, settings_path=settings_path)
