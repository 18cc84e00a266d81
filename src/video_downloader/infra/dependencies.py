"""Infrastructure: locating and installing yt-dlp and ffmpeg.

Resolution order for each tool:

1. the system ``PATH`` (``name`` then ``name.exe``),
2. the private bin directory ``~/.video-downloader/bin``,
3. a download from the tool's release page into that directory.

yt-dlp additionally falls back to the ``yt_dlp`` Python package
(``python -m yt_dlp``).  A missing ffmpeg is not fatal: yt-dlp still
downloads single-file formats without it.

Rules
-----
* No user-facing output; progress is reported through callbacks.
* Network and archive errors surface as
  :class:`~video_downloader.exceptions.DependencyError`.
"""

from __future__ import annotations

import importlib.util
import logging
import platform
import shutil
import stat
import subprocess
import sys
import tarfile
import zipfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import requests

from video_downloader.core.models import DependencyPaths
from video_downloader.exceptions import DependencyError, FfmpegNotFoundError
from video_downloader.utils.paths import bin_dir

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]
ByteProgressCallback = Callable[[int, int | None], None]

YTDLP_URLS: dict[str, str] = {
    "win32": "https://github.com/yt-dlp/yt-dlp/releases/latest/download/yt-dlp.exe",
    "darwin": "https://github.com/yt-dlp/yt-dlp/releases/latest/download/yt-dlp_macos",
    "linux": "https://github.com/yt-dlp/yt-dlp/releases/latest/download/yt-dlp",
}

FFMPEG_ARCHIVES: dict[str, tuple[str, str]] = {
    "darwin": ("https://evermeet.cx/ffmpeg/getrelease/zip", "ffmpeg.zip"),
    "linux": (
        "https://github.com/BtbN/FFmpeg-Builds/releases/download/latest/"
        "ffmpeg-master-latest-linux64-gpl.tar.xz",
        "ffmpeg.tar.xz",
    ),
    "win32": (
        "https://www.gyan.dev/ffmpeg/builds/ffmpeg-release-essentials.zip",
        "ffmpeg.zip",
    ),
}

HTTP_TIMEOUT_SECONDS = 30
_CHUNK_SIZE = 64 * 1024


# ---------------------------------------------------------------------------
# Platform helpers
# ---------------------------------------------------------------------------

def get_platform() -> str:
    """Normalise the host OS to ``"darwin"``, ``"win32"`` or ``"linux"``."""
    system = platform.system().lower()
    if system == "darwin":
        return "darwin"
    if system == "windows":
        return "win32"
    return "linux"


def executable_name(name: str) -> str:
    return f"{name}.exe" if get_platform() == "win32" else name


def find_on_path(name: str) -> str | None:
    """Return ``name`` or ``name.exe`` when either is on PATH."""
    for candidate in (name, f"{name}.exe"):
        if shutil.which(candidate) is not None:
            return candidate
    return None


def ytdlp_module_available() -> bool:
    return importlib.util.find_spec("yt_dlp") is not None


def _make_executable(path: Path) -> None:
    if get_platform() == "win32":
        return
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


# ---------------------------------------------------------------------------
# Download and extraction
# ---------------------------------------------------------------------------

def download_file(
    url: str,
    dest: Path,
    *,
    on_progress: ByteProgressCallback | None = None,
) -> Path:
    """Stream *url* into *dest*.

    Raises
    ------
    DependencyError
        On any HTTP or filesystem error.  A partial file is removed.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading %s -> %s", url, dest)
    try:
        with requests.get(url, stream=True, timeout=HTTP_TIMEOUT_SECONDS) as response:
            response.raise_for_status()
            total_header = response.headers.get("content-length")
            total = int(total_header) if total_header and total_header.isdigit() else None
            received = 0
            with open(dest, "wb") as fh:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    if not chunk:
                        continue
                    fh.write(chunk)
                    received += len(chunk)
                    if on_progress is not None:
                        on_progress(received, total)
    except (requests.RequestException, OSError) as exc:
        dest.unlink(missing_ok=True)
        raise DependencyError(f"Failed to download {url}: {exc}") from exc
    return dest


def extract_archive(archive: Path, dest_dir: Path) -> None:
    """Unpack a ``.zip`` or ``.tar.*`` archive into *dest_dir*.

    Raises
    ------
    DependencyError
        For unsupported formats and corrupt archives.
    """
    name = archive.name.lower()
    try:
        if name.endswith(".zip"):
            with zipfile.ZipFile(archive) as zf:
                zf.extractall(dest_dir)
        elif name.endswith((".tar.xz", ".txz", ".tar.gz", ".tgz", ".tar")):
            with tarfile.open(archive) as tf:
                if hasattr(tarfile, "data_filter"):
                    tf.extractall(dest_dir, filter="data")
                else:
                    tf.extractall(dest_dir)
        else:
            raise DependencyError(f"Unsupported archive format: {archive.name}")
    except (zipfile.BadZipFile, tarfile.TarError, OSError) as exc:
        raise DependencyError(f"Failed to extract {archive.name}: {exc}") from exc


def find_binary(directory: Path, name: str) -> Path | None:
    """Depth-first search for a file called *name* below *directory*."""
    if not directory.is_dir():
        return None
    for path in sorted(directory.rglob(name)):
        if path.is_file():
            return path
    return None


# ---------------------------------------------------------------------------
# Installers
# ---------------------------------------------------------------------------

def install_ytdlp(
    *,
    on_status: StatusCallback | None = None,
    on_progress: ByteProgressCallback | None = None,
) -> Path:
    """Download the standalone yt-dlp binary into the private bin dir."""
    plat = get_platform()
    target = bin_dir() / executable_name("yt-dlp")
    if on_status:
        on_status("downloading")
    download_file(YTDLP_URLS[plat], target, on_progress=on_progress)
    _make_executable(target)
    logger.info("Installed yt-dlp to %s", target)
    return target


def install_ffmpeg(
    *,
    on_status: StatusCallback | None = None,
    on_progress: ByteProgressCallback | None = None,
) -> Path:
    """Download an ffmpeg build, unpack it and copy the binaries out.

    ``ffprobe`` is copied too when the archive ships it next to ffmpeg.
    """
    plat = get_platform()
    url, archive_name = FFMPEG_ARCHIVES[plat]
    destination = bin_dir()
    temp_dir = destination / "temp"
    temp_dir.mkdir(parents=True, exist_ok=True)
    try:
        if on_status:
            on_status("downloading")
        archive = download_file(url, temp_dir / archive_name, on_progress=on_progress)

        if on_status:
            on_status("extracting")
        extract_archive(archive, temp_dir)

        if on_status:
            on_status("searching")
        ffmpeg_name = executable_name("ffmpeg")
        found = find_binary(temp_dir, ffmpeg_name)
        if found is None:
            raise DependencyError(f"{ffmpeg_name} not found in {archive_name}")

        target = destination / ffmpeg_name
        shutil.copy2(found, target)
        _make_executable(target)

        ffprobe = found.with_name(executable_name("ffprobe"))
        if ffprobe.is_file():
            probe_target = destination / ffprobe.name
            shutil.copy2(ffprobe, probe_target)
            _make_executable(probe_target)
    except OSError as exc:
        raise DependencyError(f"Failed to install ffmpeg: {exc}") from exc
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    logger.info("Installed ffmpeg to %s", target)
    return target


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve_ytdlp(
    *,
    install: bool = True,
    on_status: StatusCallback | None = None,
    on_progress: ByteProgressCallback | None = None,
) -> tuple[str, ...]:
    """Return the command prefix that runs yt-dlp.

    Raises
    ------
    DependencyError
        When no source of yt-dlp is usable.
    """
    on_path = find_on_path("yt-dlp")
    if on_path:
        return (on_path,)

    local = bin_dir() / executable_name("yt-dlp")
    if local.is_file():
        return (str(local),)

    if install:
        try:
            return (str(install_ytdlp(on_status=on_status, on_progress=on_progress)),)
        except DependencyError as exc:
            logger.warning("yt-dlp install failed: %s", exc)

    if ytdlp_module_available():
        logger.info("Falling back to the yt_dlp Python package")
        return (sys.executable, "-m", "yt_dlp")

    raise DependencyError(
        "yt-dlp was not found and could not be installed.",
        hint="Install it manually: https://github.com/yt-dlp/yt-dlp#installation",
    )


def ytdlp_version(command: tuple[str, ...]) -> str | None:
    """Return the output of ``<command> --version``, or ``None`` on failure."""
    try:
        proc = subprocess.run(
            [*command, "--version"],
            capture_output=True,
            text=True,
            timeout=15,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("yt-dlp --version failed: %s", exc)
        return None
    if proc.returncode != 0:
        return None
    return proc.stdout.strip() or None


def resolve_ffmpeg(
    *,
    install: bool = True,
    on_status: StatusCallback | None = None,
    on_progress: ByteProgressCallback | None = None,
) -> Path | str | None:
    """Return ffmpeg's PATH name, a local :class:`Path`, or ``None``."""
    on_path = find_on_path("ffmpeg")
    if on_path:
        return on_path

    local = bin_dir() / executable_name("ffmpeg")
    if local.is_file():
        return local

    if install:
        try:
            return install_ffmpeg(on_status=on_status, on_progress=on_progress)
        except DependencyError as exc:
            logger.warning("ffmpeg install failed: %s", exc)
    return None


def ensure_dependencies(
    *,
    install: bool = True,
    on_status: Callable[[str, str], None] | None = None,
    on_progress: ByteProgressCallback | None = None,
) -> DependencyPaths:
    """Locate (installing when needed) both external tools.

    *on_status* receives ``(tool, stage)`` pairs such as
    ``("ffmpeg", "extracting")`` so the caller can render them.

    Raises
    ------
    DependencyError
        When yt-dlp is unavailable.  A missing ffmpeg is only logged.
    """

    def _status(tool: str) -> StatusCallback | None:
        if on_status is None:
            return None
        return lambda stage: on_status(tool, stage)

    ytdlp = resolve_ytdlp(install=install, on_status=_status("yt-dlp"), on_progress=on_progress)
    ffmpeg = resolve_ffmpeg(install=install, on_status=_status("ffmpeg"), on_progress=on_progress)

    if ffmpeg is None:
        logger.warning("ffmpeg not available; merging and mp3 conversion will fail")
        return DependencyPaths(ytdlp=ytdlp)
    if isinstance(ffmpeg, Path):
        return DependencyPaths(
            ytdlp=ytdlp,
            ffmpeg=str(ffmpeg),
            ffmpeg_found=True,
            ffmpeg_location=str(ffmpeg),
        )
    return DependencyPaths(ytdlp=ytdlp, ffmpeg=ffmpeg, ffmpeg_found=True)


# ---------------------------------------------------------------------------
# ffmpeg diagnostics
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FfmpegStatus:
    """Result of an ffmpeg detection probe.

    Attributes
    ----------
    found : bool
        Whether ffmpeg was located on PATH or in the private bin dir.
    path : Path | None
        Absolute path to the ffmpeg binary, or ``None``.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing ffmpeg on this platform.
        Empty when ffmpeg is already present.
    """

    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]


def detect_ffmpeg() -> FfmpegStatus:
    """Probe for ffmpeg without installing anything."""
    result = shutil.which("ffmpeg")
    if result is not None:
        resolved = Path(result).resolve()
        return FfmpegStatus(
            found=True,
            path=resolved,
            version_hint=f"found at {resolved}",
            install_commands=(),
        )

    local = bin_dir() / executable_name("ffmpeg")
    if local.is_file():
        return FfmpegStatus(
            found=True,
            path=local,
            version_hint=f"found at {local}",
            install_commands=(),
        )

    return FfmpegStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=platform_install_commands(),
    )


def require_ffmpeg() -> Path:
    """Locate ffmpeg or raise :class:`FfmpegNotFoundError`."""
    status = detect_ffmpeg()
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append("Install ffmpeg using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise FfmpegNotFoundError(
            "ffmpeg is not installed or not on PATH.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


def platform_install_commands() -> tuple[str, ...]:
    """Return package-manager commands appropriate for the current OS."""
    plat = get_platform()
    if plat == "win32":
        return (
            "winget install Gyan.FFmpeg",
            "choco install ffmpeg",
        )
    if plat == "darwin":
        return ("brew install ffmpeg",)
    return (
        "sudo apt install ffmpeg",
        "sudo dnf install ffmpeg",
        "sudo pacman -S ffmpeg",
    )
