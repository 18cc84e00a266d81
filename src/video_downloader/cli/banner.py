"""Start-up banner: title panel, version, project URL and disclaimer link."""

from __future__ import annotations

from typing import Any

from video_downloader.cli.console import get_rich_console
from video_downloader.i18n import get_language, t
from video_downloader.version import __version__

GITHUB_URL = "https://github.com/dbelyaeff/video-downloader"
DISCLAIMER_URLS: dict[str, str] = {
    "en": f"{GITHUB_URL}/blob/main/DISCLAIMER.EN.md",
    "ru": f"{GITHUB_URL}/blob/main/DISCLAIMER.RU.md",
}


def disclaimer_url(lang: str | None = None) -> str:
    return DISCLAIMER_URLS.get(lang or get_language(), DISCLAIMER_URLS["en"])


def build_banner() -> Any:
    """Return the banner renderable (a Rich ``Panel``)."""
    from rich.align import Align
    from rich.console import Group
    from rich.panel import Panel
    from rich.text import Text

    url = disclaimer_url()
    return Group(
        Panel(
            Align.center(Text(t("app.title").upper(), style="bold cyan")),
            border_style="cyan",
            padding=(1, 4),
            width=60,
        ),
        Align.center(
            Text.assemble(
                (f"v{__version__}", "dim"),
                ("  •  ", "dim"),
                (GITHUB_URL, "cyan underline"),
            ),
            width=60,
        ),
        Align.center(
            Text.assemble(
                (t("app.disclaimer") + " ", "dim"),
                (t("app.terms_of_use"), f"yellow underline link {url}"),
            ),
            width=60,
        ),
        Align.center(Text(url, style="dim"), width=60),
    )


def show_banner(*, clear: bool = True) -> None:
    rich_console = get_rich_console()
    if clear:
        rich_console.clear()
    rich_console.print(build_banner())
    rich_console.print()
