"""Presentation helpers (pure transforms, no I/O)."""

from __future__ import annotations

_BYTE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB")


def format_bytes(num_bytes: float) -> str:
    """Render a byte count as ``"1.5 MB"`` (base 1024, up to GB)."""
    if num_bytes <= 0:
        return "0 B"
    value = float(num_bytes)
    index = 0
    while value >= 1024 and index < len(_BYTE_UNITS) - 1:
        value /= 1024
        index += 1
    value = round(value, 2)
    # ``1.50`` -> ``1.5``, ``2.00`` -> ``2``
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_BYTE_UNITS[index]}"


def progress_bar(percent: float, width: int = 20) -> str:
    percent = max(0.0, min(100.0, percent))
    filled = round(percent / 100 * width)
    return "█" * filled + "░" * (width - filled)


def truncate_title(title: str, max_length: int = 75) -> str:
    """Shorten *title* without splitting a word, marking the cut with ``…``."""
    if len(title) <= max_length:
        return title
    truncated = title[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        return truncated[:last_space] + "…"
    return truncated + "…"


def quality_label(quality: str) -> str:
    return f"[{quality.upper()}]"


def preview_description(description: str, max_chars: int = 500, max_lines: int = 10) -> list[str]:
    """Non-blank lines of the first *max_chars* characters, at most *max_lines*."""
    text = description
    if len(text) > max_chars:
        text = text[:max_chars] + "..."
    lines = text.split("\n")[:max_lines]
    return [line for line in lines if line.strip()]
