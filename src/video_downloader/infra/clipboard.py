"""Copy text to the system clipboard through the platform's CLI utility."""

from __future__ import annotations

import logging
import shutil
import subprocess

from video_downloader.exceptions import ClipboardError
from video_downloader.infra.dependencies import get_platform

logger = logging.getLogger(__name__)

LINUX_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


def clipboard_commands() -> tuple[tuple[str, ...], ...]:
    plat = get_platform()
    if plat == "darwin":
        return (("pbcopy",),)
    if plat == "win32":
        return (("clip",),)
    return LINUX_COMMANDS


def copy_to_clipboard(text: str) -> str:
    """Pipe *text* into the first available clipboard utility.

    Returns the name of the utility that accepted the text.

    Raises
    ------
    ClipboardError
        When no utility is installed or every one of them failed.
    """
    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            subprocess.run(command, input=text, text=True, check=True, timeout=10)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("%s failed: %s", command[0], exc)
            continue
        return command[0]

    names = ", ".join(command[0] for command in clipboard_commands())
    raise ClipboardError(
        "No clipboard utility available.",
        hint=f"Install one of: {names}",
    )
