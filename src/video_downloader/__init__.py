"""video-downloader — interactive front end for yt-dlp and ffmpeg.

Downloads, transcodes and tags online video by shelling out to the
external tools and rendering their progress with Rich.
"""

from video_downloader.version import __version__

__all__: list[str] = ["__version__"]
