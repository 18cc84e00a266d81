"""The interactive "Download video" flow.

Flow:
1. Ask for the URL (unless one was given on the command line).
2. Fetch metadata with a spinner.
3. Ask for the file name and the target directory.
4. Preview the title and description.
5. Ask about the cover and the description (download / copy / skip).
6. List available qualities with sizes and let the user pick.
7. Confirm, download with progress bars, print a summary.

Errors never escape: they are rendered and the caller's menu resumes.
"""

from __future__ import annotations

import logging
import os

from video_downloader.cli.console import console, escape, print_error
from video_downloader.cli.progress import RichDownloadObserver
from video_downloader.cli.prompts import (
    ask_checkbox,
    ask_select,
    ask_text,
    ask_yes_no,
    not_blank,
)
from video_downloader.core.download_service import DownloadService
from video_downloader.core.formatting import preview_description
from video_downloader.core.metadata_service import MetadataService
from video_downloader.core.models import (
    DependencyPaths,
    DownloadRequest,
    DownloadResult,
    Settings,
    VideoInfo,
)
from video_downloader.core.quality import (
    available_qualities,
    preselected_qualities,
    render_filename,
)
from video_downloader.exceptions import (
    AuthenticationRequiredError,
    ClipboardError,
    FfmpegNotFoundError,
    FormatSelectionError,
    PromptCancelled,
    VideoDownloaderError,
)
from video_downloader.i18n import t
from video_downloader.infra.clipboard import copy_to_clipboard
from video_downloader.infra.dependencies import require_ffmpeg
from video_downloader.infra.ytdlp_cli import YtDlpCli
from video_downloader.utils.paths import expand_path

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------

def print_auth_help() -> None:
    console.print()
    console.print(f"[bold red]{t('auth.required')}[/bold red]")
    console.print(f"[red]{t('auth.youtube_bot')}[/red]")
    console.print()
    console.print(f"[bold]{t('auth.solution')}[/bold]")
    for step in ("step1", "step2", "step3", "step4"):
        console.print(f"  {t(f'auth.{step}')}")
    console.print()


def print_preview(info: VideoInfo) -> None:
    console.print()
    console.print(f"[bold cyan]{t('download.video_preview')}[/bold cyan]")
    console.print(escape(t("download.video_title", title=info.title or "N/A")))
    if info.uploader:
        console.print(escape(t("download.video_uploader", uploader=info.uploader)))
    lines = preview_description(info.description) if info.description else []
    if lines:
        console.print(t("download.video_description"))
        for line in lines:
            console.print(f"[dim]  {escape(line)}[/dim]")
    console.print()


def print_summary(results: list[DownloadResult]) -> None:
    total_mb = round(sum(result.size_mb for result in results), 2)
    console.print()
    console.print(f"[bold green]{t('download.download_complete')}[/bold green]")
    console.print(t("download.total_files", count=len(results)))
    console.print(t("download.total_size", size=total_mb))
    for result in results:
        console.print(
            escape(
                t(
                    "download.file_info",
                    filename=result.filename,
                    quality=result.quality,
                    size=result.size_mb,
                )
            )
        )


def quality_choice_label(quality: str, size: str) -> str:
    name = t("qualities.mp3") if quality == "mp3" else quality
    return f"{name} ({size})"


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

def _ask_url() -> str:
    return ask_text(t("download.enter_url"), validate=not_blank).strip()


def _ask_description_action(info: VideoInfo, settings: Settings) -> str:
    action = ask_select(
        t("download.description_options"),
        [
            (t("download.description_download"), "download"),
            (t("download.description_copy"), "copy"),
            (t("download.description_skip"), "skip"),
        ],
        default="download" if settings.download_description else "skip",
    )
    if action == "copy" and info.description:
        try:
            tool = copy_to_clipboard(info.description)
        except ClipboardError as exc:
            console.print(f"[red]{escape(t('download.copy_failed', message=str(exc)))}[/red]")
            if exc.hint:
                console.print(f"[yellow]{escape(exc.hint)}[/yellow]")
        else:
            logger.debug("Description copied with %s", tool)
            console.print(f"[green]✅ {t('download.description_copied')}[/green]")
    return action


def _ask_qualities(sizes: dict[str, str], settings: Settings) -> list[str]:
    available = available_qualities(sizes)
    if not available:
        raise FormatSelectionError(t("download.no_formats"))
    return ask_checkbox(
        t("download.select_quality"),
        [(quality_choice_label(q, sizes[q]), q) for q in available],
        checked=preselected_qualities(settings.preferred_quality, available),
    )


def _warn_if_mp3_without_ffmpeg(qualities: list[str], paths: DependencyPaths) -> None:
    if "mp3" not in qualities or paths.ffmpeg_found:
        return
    try:
        require_ffmpeg()
    except FfmpegNotFoundError as exc:
        console.print(f"[yellow]⚠ {escape(str(exc))}[/yellow]")
        if exc.hint:
            console.print(f"[dim]{escape(exc.hint)}[/dim]")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def download_video(
    settings: Settings,
    paths: DependencyPaths,
    url: str | None = None,
) -> list[DownloadResult] | None:
    """Run the whole flow once.

    Raises
    ------
    PromptCancelled
        When the user backs out of any prompt.
    VideoDownloaderError
        For metadata, format and environment failures.
    """
    cli = YtDlpCli(paths, browser=settings.browser, debug=settings.debug)
    metadata = MetadataService(cli)

    url = url.strip() if url else _ask_url()
    url = MetadataService.validate_url(url)

    with console.status(t("download.getting_video_info")):
        info = metadata.fetch_video_info(url)
    console.print(f"[green]✅ {t('common.success')}[/green]")

    filename = ask_text(
        t("download.enter_filename"),
        default=render_filename(settings.default_filename, info),
        validate=not_blank,
    ).strip()
    download_path = ask_text(
        t("download.enter_path"),
        default=settings.default_download_path or os.getcwd(),
    ).strip()
    download_path = expand_path(download_path or os.getcwd())

    print_preview(info)

    download_cover = ask_yes_no(
        t("download.download_cover_question"), default=settings.download_cover
    )
    description_action = _ask_description_action(info, settings)

    with console.status(t("download.getting_format_sizes")):
        sizes = metadata.get_format_sizes(url)
    qualities = _ask_qualities(sizes, settings)
    _warn_if_mp3_without_ffmpeg(qualities, paths)

    if not ask_yes_no(t("download.confirm_download"), default=True):
        raise PromptCancelled(t("common.cancelled"))

    request = DownloadRequest(
        filename=filename,
        download_path=download_path,
        qualities=tuple(qualities),
        download_cover=download_cover,
        download_description=description_action == "download",
        browser=settings.browser,
        mp3_bitrate=settings.mp3_bitrate,
    )
    console.print(f"[bold]{t('download.downloading')}[/bold]")
    service = DownloadService(cli)
    results = service.download_all(
        info, request, observer=RichDownloadObserver(info, sizes)
    )
    print_summary(results)
    return results


def run_download_flow(
    settings: Settings,
    paths: DependencyPaths,
    url: str | None = None,
) -> list[DownloadResult] | None:
    """:func:`download_video` with every library error rendered.

    Returns ``None`` when the flow was cancelled or failed.
    """
    try:
        return download_video(settings, paths, url)
    except PromptCancelled:
        console.print(f"[yellow]{t('common.cancelled')}[/yellow]")
    except AuthenticationRequiredError as exc:
        logger.debug("Authentication required: %s", exc)
        print_auth_help()
    except VideoDownloaderError as exc:
        print_error(exc)
    return None
