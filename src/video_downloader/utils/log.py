"""Logging configuration.

Console records go through :class:`rich.logging.RichHandler` on stderr so
they interleave cleanly with prompts and progress bars; a rotating file
under ``~/.video-downloader/logs`` always receives every record.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from video_downloader.utils.paths import log_dir

LOG_FILE_NAME = "video-downloader.log"
FILE_FORMAT = "%(asctime)s - %(levelname)s [%(name)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(debug: bool = False, log_path: Path | None = None) -> None:
    """Install console and file handlers on the root logger.

    Safe to call more than once: previously installed handlers are
    replaced, which is how the settings menu toggles debug output.
    """
    from rich.console import Console
    from rich.logging import RichHandler

    console_level = logging.DEBUG if debug else logging.WARNING
    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_level=True,
        show_path=False,
        markup=False,
    )
    console_handler.setLevel(console_level)
    handlers: list[logging.Handler] = [console_handler]

    target = log_path or log_dir() / LOG_FILE_NAME
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(target),
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
    except OSError:
        # Read-only home: console logging only.
        file_handler = None
    if file_handler is not None:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if file_handler else console_level,
        handlers=handlers,
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
