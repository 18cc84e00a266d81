"""Pure parsers for the text yt-dlp prints.

Every function in this module is a deterministic transformation of a
string; no I/O, trivially unit-testable.

* ``--list-formats`` table  → best size per quality
* ``--newline`` progress lines → :class:`ProgressUpdate`
"""

from __future__ import annotations

import re

from video_downloader.core.models import ProgressUpdate

UNIT_MULTIPLIERS: dict[str, int] = {
    "B": 1,
    "KiB": 1024,
    "MiB": 1024**2,
    "GiB": 1024**3,
    "TiB": 1024**4,
    "KB": 1000,
    "MB": 1000**2,
    "GB": 1000**3,
    "TB": 1000**4,
}

_VIDEO_ROW = re.compile(
    r"(\d+)x(\d+)\s+.*?(\d+\.?\d*\s*(?:MiB|GiB|KiB))",
    re.IGNORECASE,
)
_AUDIO_ROW = re.compile(
    r"audio only.*?(\d+\.?\d*\s*(?:MiB|GiB|KiB))",
    re.IGNORECASE,
)
_SIZE = re.compile(r"(\d+\.?\d*)\s*(\w+)")
_PROGRESS = re.compile(
    r"\[download\]\s+(\d+\.?\d*)%\s+of\s+~?\s*(\d+\.?\d*)([KMGT]i?B)"
    r"\s+at\s+([\d.]+[KMGT]?i?B/s)"
    r"(?:\s+ETA\s+(\S+))?"
)


# ---------------------------------------------------------------------------
# Sizes
# ---------------------------------------------------------------------------

def size_to_bytes(value: float, unit: str) -> float:
    """Convert *value* in *unit* to bytes; unknown units count as bytes."""
    return value * UNIT_MULTIPLIERS.get(unit, 1)


def _size_text_to_bytes(text: str) -> float:
    match = _SIZE.search(text)
    if match is None:
        return 0.0
    return size_to_bytes(float(match.group(1)), match.group(2))


def quality_for_height(height: int) -> str | None:
    """Bucket a stream height into one of the offered video qualities."""
    if height >= 2160:
        return "4K"
    if height >= 1080:
        return "1080p"
    if height >= 720:
        return "720p"
    if height >= 480:
        return "480p"
    return None


# ---------------------------------------------------------------------------
# --list-formats
# ---------------------------------------------------------------------------

def parse_format_sizes(listing: str) -> dict[str, str]:
    """Map each available quality to a human-readable size.

    The first video row seen for a quality wins; yt-dlp lists formats in
    ascending quality so that is the smallest stream of the bucket.  For
    audio the largest ``audio only`` stream is kept under ``"mp3"``.
    """
    sizes: dict[str, str] = {}
    best_audio: str | None = None
    best_audio_bytes = 0.0

    for line in listing.splitlines():
        video = _VIDEO_ROW.search(line)
        if video:
            quality = quality_for_height(int(video.group(2)))
            if quality and quality not in sizes:
                sizes[quality] = video.group(3).strip()

        audio = _AUDIO_ROW.search(line)
        if audio:
            size_text = audio.group(1).strip()
            size_bytes = _size_text_to_bytes(size_text)
            if size_bytes > best_audio_bytes:
                best_audio_bytes = size_bytes
                best_audio = size_text

    if best_audio:
        sizes["mp3"] = best_audio
    return sizes


# ---------------------------------------------------------------------------
# Progress lines
# ---------------------------------------------------------------------------

def parse_progress_line(line: str) -> ProgressUpdate | None:
    """Parse ``[download]  45.2% of 10.00MiB at 1.23MiB/s ETA 00:05``.

    Returns ``None`` for every other kind of output line.
    """
    match = _PROGRESS.search(line)
    if match is None:
        return None
    percent = float(match.group(1))
    total = size_to_bytes(float(match.group(2)), match.group(3))
    return ProgressUpdate(
        percent=percent,
        total_bytes=total,
        speed=match.group(4),
        eta=match.group(5),
    )
