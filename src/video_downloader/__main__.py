"""Allow ``python -m video_downloader`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m video_downloader`` behaves identically to the console script.
"""

from __future__ import annotations

from video_downloader.cli.app import cli

if __name__ == "__main__":
    cli()
