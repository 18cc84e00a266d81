"""``video-downloader doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can run downloads.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  Nothing is installed here;
tools are only looked up.
"""

from __future__ import annotations

import platform
import sys

from video_downloader.cli import exit_codes
from video_downloader.cli.console import console
from video_downloader.exceptions import DependencyError
from video_downloader.infra.dependencies import detect_ffmpeg, resolve_ytdlp, ytdlp_version
from video_downloader.infra.settings_store import settings_exist
from video_downloader.utils.paths import settings_file
from video_downloader.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _app_version_check() -> tuple[str, str, str]:
    return "video-downloader", __version__, OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _ytdlp_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the yt-dlp row.

    The binary on PATH or in the private bin dir wins; the ``yt_dlp``
    package is reported when it is the only option.
    """
    try:
        command = resolve_ytdlp(install=False)
    except DependencyError:
        return "yt-dlp", "NOT INSTALLED", FAIL

    version = ytdlp_version(command) or "unknown"
    if command[1:2] == ("-m",):
        return "yt-dlp", f"{version} (python module)", OK
    return "yt-dlp", f"{version} ({command[0]})", OK


def _ffmpeg_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the ffmpeg row."""
    status_obj = detect_ffmpeg()
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return "ffmpeg", path_str, OK
    return "ffmpeg", "not found", WARN


def _settings_check() -> tuple[str, str, str]:
    path = settings_file()
    if settings_exist(path):
        return "settings", str(path), OK
    return "settings", f"{path} (defaults)", OK


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, OK


def collect_checks() -> list[tuple[str, str, str]]:
    return [
        _app_version_check(),
        _python_version_check(),
        _ytdlp_check(),
        _ffmpeg_check(),
        _settings_check(),
        _os_check(),
    ]


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nvideo-downloader doctor", file=sys.stderr)
    print("=" * 72, file=sys.stderr)
    print(f"{'Component':<18} {'Value':<44} {'Status':<8}", file=sys.stderr)
    print("-" * 72, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<18} {value:<44} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = collect_checks()
    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="video-downloader doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    # ffmpeg install guidance when missing.
    ffmpeg_status = detect_ffmpeg()
    if not ffmpeg_status.found and ffmpeg_status.install_commands:
        console.print("ffmpeg is not installed; merging formats and MP3 conversion need it.")
        console.print("Install using one of the following commands:\n")
        for cmd in ffmpeg_status.install_commands:
            console.print(f"  {cmd}")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]" if rich_available else "Some checks failed.")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]" if rich_available else "All checks passed.")
    return exit_codes.SUCCESS
