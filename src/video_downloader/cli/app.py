"""CLI application entry point and command routing for video-downloader.

This module is the **sole error boundary** for the entire application.
It catches :class:`~video_downloader.exceptions.VideoDownloaderError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the menu,
  core services and infrastructure layers.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from video_downloader.cli import exit_codes
from video_downloader.cli.console import console
from video_downloader.core.models import Settings
from video_downloader.exceptions import VideoDownloaderError
from video_downloader.i18n import AVAILABLE_LANGUAGES, set_language
from video_downloader.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``video-downloader``          — interactive menu
    * ``video-downloader <url>``    — straight into the download flow
    * ``video-downloader doctor``   — environment diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="video-downloader",
        description="Interactive video downloader built on yt-dlp and ffmpeg.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show yt-dlp stderr and debug logging for this run.",
    )
    parser.add_argument(
        "--lang",
        choices=AVAILABLE_LANGUAGES,
        default=None,
        help="Interface language for this run.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Video URL to download, or 'doctor' to run diagnostics.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _load_settings(args: argparse.Namespace) -> Settings:
    from video_downloader.infra.settings_store import load_settings

    settings = load_settings()
    if args.debug:
        settings.debug = True
    if args.lang:
        settings.language = args.lang
    set_language(settings.language)
    return settings


def _handle_interactive(settings: Settings, *, language_forced: bool = False) -> int:
    from video_downloader.cli.menu import run_interactive

    run_interactive(settings, language_forced=language_forced)
    return exit_codes.SUCCESS


def _handle_download(settings: Settings, url: str) -> int:
    """Download *url* without showing the main menu.

    Exit status is non-zero when the flow is cancelled, fails, or writes
    no file at all.
    """
    from video_downloader.cli.download_flow import run_download_flow
    from video_downloader.cli.menu import prepare_dependencies

    paths = prepare_dependencies()
    results = run_download_flow(settings, paths, url)
    return exit_codes.SUCCESS if results else exit_codes.GENERAL_ERROR


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from video_downloader.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the video-downloader CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    # doctor must keep working when rich itself is broken.
    if args.target is not None and args.target.lower() == "doctor":
        return _handle_doctor()

    from video_downloader.utils.log import configure_logging

    configure_logging(debug=args.debug)
    settings = _load_settings(args)
    if settings.debug and not args.debug:
        configure_logging(debug=True)
    logger.debug("video-downloader %s starting (target=%s)", __version__, args.target)

    if args.target is None:
        return _handle_interactive(settings, language_forced=args.lang is not None)
    return _handle_download(settings, args.target)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except VideoDownloaderError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unhandled exception", exc_info=True)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
