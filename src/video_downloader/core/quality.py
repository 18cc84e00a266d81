"""Quality catalogue, yt-dlp argument construction and output naming.

Pure functions only.  The order of :data:`QUALITY_ORDER` is the order in
which qualities are offered to the user and downloaded.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from video_downloader.core.models import VideoInfo

QUALITY_ORDER: tuple[str, ...] = ("4K", "1080p", "720p", "480p", "mp3")

QUALITY_HEIGHTS: dict[str, int] = {
    "4K": 2160,
    "1080p": 1080,
    "720p": 720,
    "480p": 480,
}

AUDIO_QUALITY = "mp3"

_INVALID_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')
_TEMPLATE_FIELD = re.compile(r"\{(title|uploader|upload_date|id)\}")


# ---------------------------------------------------------------------------
# yt-dlp arguments
# ---------------------------------------------------------------------------

def cookie_args(browser: str) -> list[str]:
    """``--cookies-from-browser`` arguments, or nothing when unset."""
    if not browser:
        return []
    return ["--cookies-from-browser", browser]


def build_format_spec(quality: str) -> str:
    """Build the yt-dlp ``--format`` selector for a video quality.

    mp4 video with m4a audio is preferred so the merge needs no
    re-encode; any container at the height limit is the fallback.
    """
    height = QUALITY_HEIGHTS.get(quality, QUALITY_HEIGHTS["480p"])
    return (
        f"bestvideo[height<={height}][ext=mp4]+bestaudio[ext=m4a]"
        f"/bestvideo[height<={height}]+bestaudio"
        f"/best[height<={height}]"
    )


def build_download_args(
    quality: str,
    output_path: str,
    url: str,
    *,
    browser: str = "",
    mp3_bitrate: int = 128,
) -> list[str]:
    """Arguments for one quality of one video (without the yt-dlp command)."""
    args = ["--no-warnings", "--newline", "--progress"]
    args.extend(cookie_args(browser))

    if quality == AUDIO_QUALITY:
        args.extend(["--extract-audio", "--audio-format", "mp3"])
        args.extend(["--audio-quality", f"{mp3_bitrate}K"])
        args.append("--embed-thumbnail")
        args.append("--add-metadata")
    else:
        args.extend(["--format", build_format_spec(quality)])
        args.extend(["--merge-output-format", "mp4"])

    args.extend(["--output", output_path])
    args.append(url)
    return args


def build_cover_args(output_base: str, url: str, *, browser: str = "") -> list[str]:
    return [
        "--write-thumbnail",
        "--skip-download",
        "--convert-thumbnails",
        "jpg",
        *cookie_args(browser),
        "--output",
        output_base,
        url,
    ]


def build_description_args(output_base: str, url: str, *, browser: str = "") -> list[str]:
    return [
        "--write-description",
        "--skip-download",
        *cookie_args(browser),
        "--output",
        output_base,
        url,
    ]


# ---------------------------------------------------------------------------
# Filenames
# ---------------------------------------------------------------------------

def strip_mp4_suffix(name: str) -> str:
    return name[:-4] if name.endswith(".mp4") else name


def output_filename(base: str, quality: str) -> str:
    """``<base>.mp3`` for audio, ``<base>_<quality>.mp4`` for video."""
    base = strip_mp4_suffix(base)
    if quality == AUDIO_QUALITY:
        return f"{base}.mp3"
    return f"{base}_{quality}.mp4"


def sanitize_filename(name: str) -> str:
    """Replace path separators and characters Windows rejects with ``_``."""
    cleaned = _INVALID_FILENAME_CHARS.sub("_", name).strip().rstrip(".")
    return cleaned or "video"


def render_filename(template: str, info: VideoInfo) -> str:
    """Fill ``{title}``/``{uploader}``/``{upload_date}``/``{id}`` from *info*.

    An empty template yields the title.  Unknown placeholders are kept
    verbatim.
    """
    if not template.strip():
        return sanitize_filename(info.title)
    values = {
        "title": info.title,
        "uploader": info.uploader,
        "upload_date": info.upload_date,
        "id": info.id,
    }
    rendered = _TEMPLATE_FIELD.sub(lambda m: values[m.group(1)], template)
    return sanitize_filename(rendered)


# ---------------------------------------------------------------------------
# Offering qualities
# ---------------------------------------------------------------------------

def available_qualities(sizes: Mapping[str, str]) -> list[str]:
    return [quality for quality in QUALITY_ORDER if quality in sizes]


def preselected_qualities(preferred: str, available: Sequence[str]) -> list[str]:
    """Qualities to pre-check in the selector.

    ``"highest"`` picks the best available entry; a concrete quality is
    pre-checked only when the video offers it.
    """
    if not available:
        return []
    if preferred == "highest":
        return [available[0]]
    if preferred in available:
        return [preferred]
    return []
