"""Make the launcher available as a short command (``vd`` by default).

Three strategies are offered on macOS and Linux:

* ``symlink`` — ``/usr/local/bin/<alias>`` pointing at the launcher,
* ``copy`` — a copy of the launcher at the same place,
* ``path`` — an ``export PATH`` line plus an alias in the shell rc file.

Windows is not supported.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import NoReturn

from video_downloader.exceptions import InstallError
from video_downloader.i18n import t
from video_downloader.infra.dependencies import get_platform

logger = logging.getLogger(__name__)

INSTALL_DIR = Path("/usr/local/bin")
LAUNCHER_NAME = "video-downloader"

_PERMISSION_ERRNOS = (errno.EACCES, errno.EPERM)


def is_supported() -> bool:
    return get_platform() != "win32"


def find_launcher() -> Path:
    """Locate the console script that started this process.

    Raises
    ------
    InstallError
        When neither PATH nor ``sys.argv[0]`` points to a real file.
    """
    on_path = shutil.which(LAUNCHER_NAME)
    if on_path:
        return Path(on_path).resolve()
    argv0 = Path(sys.argv[0])
    if argv0.is_file():
        return argv0.resolve()
    raise InstallError(
        "Could not locate the video-downloader launcher.",
        hint="Install the package with pip so the console script exists.",
    )


def target_path(alias: str) -> Path:
    return INSTALL_DIR / alias


def shell_config_file(shell: str | None = None) -> Path:
    """Pick the rc file for ``$SHELL``: zsh, bash, else ``~/.profile``."""
    shell = shell if shell is not None else os.environ.get("SHELL", "/bin/bash")
    if "zsh" in shell:
        return Path.home() / ".zshrc"
    if "bash" in shell:
        return Path.home() / ".bashrc"
    return Path.home() / ".profile"


def _raise_install_error(exc: OSError) -> NoReturn:
    if exc.errno in _PERMISSION_ERRNOS or isinstance(exc, PermissionError):
        raise InstallError(
            f"Permission denied: {exc.filename or INSTALL_DIR}",
            hint=t("install.permission_denied"),
        ) from exc
    raise InstallError(str(exc)) from exc


def _remove_existing(target: Path, overwrite: bool) -> None:
    if not (target.exists() or target.is_symlink()):
        return
    if not overwrite:
        raise InstallError(f"{target} already exists.")
    target.unlink()


def install_symlink(launcher: Path, alias: str, *, overwrite: bool = False) -> Path:
    target = target_path(alias)
    try:
        _remove_existing(target, overwrite)
        target.symlink_to(launcher)
    except OSError as exc:
        _raise_install_error(exc)
    logger.info("Symlinked %s -> %s", target, launcher)
    return target


def install_copy(launcher: Path, alias: str, *, overwrite: bool = False) -> Path:
    target = target_path(alias)
    try:
        _remove_existing(target, overwrite)
        shutil.copy2(launcher, target)
        target.chmod(0o755)
    except OSError as exc:
        _raise_install_error(exc)
    logger.info("Copied %s to %s", launcher, target)
    return target


def add_to_path(launcher: Path, alias: str, *, config_file: Path | None = None) -> tuple[Path, bool]:
    """Append PATH and alias lines to the shell rc file.

    Returns ``(config_file, changed)``; nothing is written when the file
    already mentions the launcher's directory.
    """
    config = config_file or shell_config_file()
    binary_dir = str(launcher.parent)
    snippet = (
        "\n# Added by video-downloader\n"
        f'export PATH="$PATH:{binary_dir}"\n'
        f"alias {alias}='{launcher}'\n"
    )
    try:
        current = config.read_text(encoding="utf-8") if config.exists() else ""
        if binary_dir in current:
            return config, False
        with open(config, "a", encoding="utf-8") as fh:
            fh.write(snippet)
    except OSError as exc:
        _raise_install_error(exc)
    logger.info("Added %s to PATH in %s", binary_dir, config)
    return config, True
