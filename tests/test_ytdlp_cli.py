"""Tests for the yt-dlp subprocess wrapper (infra/ytdlp_cli.py).

``subprocess.run`` and ``subprocess.Popen`` are patched in every test;
yt-dlp is never executed.

Coverage:
* Command assembly (prefix, --ffmpeg-location, cookies).
* --dump-json success, auth detection, failures, timeout, spawn errors.
* --list-formats never raising.
* Download progress forwarding and error extraction.
* Quiet auxiliary runs.
"""

from __future__ import annotations

import io
import json
import subprocess
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from video_downloader.core.models import DependencyPaths, ProgressUpdate
from video_downloader.exceptions import (
    AuthenticationRequiredError,
    DependencyError,
    DownloadFailedError,
    MetadataExtractionError,
)
from video_downloader.infra.ytdlp_cli import (
    INFO_TIMEOUT_SECONDS,
    YtDlpCli,
    debug_enabled,
    is_auth_error,
)

URL = "https://www.youtube.com/watch?v=abc123"
RUN = "video_downloader.infra.ytdlp_cli.subprocess.run"
POPEN = "video_downloader.infra.ytdlp_cli.subprocess.Popen"


def _paths(**overrides: Any) -> DependencyPaths:
    defaults: dict[str, Any] = {"ytdlp": ("yt-dlp",), "ffmpeg_found": True}
    defaults.update(overrides)
    return DependencyPaths(**defaults)


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    proc = MagicMock()
    proc.returncode = returncode
    proc.stdout = stdout
    proc.stderr = stderr
    return proc


def _popen(output: str, returncode: int = 0) -> MagicMock:
    process = MagicMock()
    process.stdout = io.StringIO(output)
    process.wait.return_value = returncode
    return process


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestDebugEnabled:
    def test_setting(self) -> None:
        assert debug_enabled(True) is True

    def test_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEBUG", "TRUE")
        assert debug_enabled(False) is True

    def test_off(self) -> None:
        assert debug_enabled(False) is False


class TestIsAuthError:
    @pytest.mark.parametrize(
        "stderr",
        [
            "ERROR: [youtube] abc: Sign in to confirm you're not a bot.",
            "Use --cookies-from-browser or --cookies for the authentication.",
        ],
    )
    def test_detected(self, stderr: str) -> None:
        assert is_auth_error(stderr)

    def test_other_errors(self) -> None:
        assert not is_auth_error("ERROR: Video unavailable")


class TestCommand:
    def test_plain(self) -> None:
        assert YtDlpCli(_paths()).command(["--version"]) == ["yt-dlp", "--version"]

    def test_module_prefix(self) -> None:
        cli = YtDlpCli(_paths(ytdlp=("/usr/bin/python3", "-m", "yt_dlp")))
        assert cli.command(["-U"]) == ["/usr/bin/python3", "-m", "yt_dlp", "-U"]

    def test_ffmpeg_location(self) -> None:
        cli = YtDlpCli(_paths(ffmpeg_location="/home/u/.video-downloader/bin/ffmpeg"))
        assert cli.command([URL]) == [
            "yt-dlp",
            "--ffmpeg-location",
            "/home/u/.video-downloader/bin/ffmpeg",
            URL,
        ]


# ---------------------------------------------------------------------------
# fetch_info
# ---------------------------------------------------------------------------

class TestFetchInfo:
    @patch(RUN)
    def test_success(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout=json.dumps({"id": "abc123", "title": "T"}))
        info = YtDlpCli(_paths(), browser="chrome").fetch_info(URL)

        assert info == {"id": "abc123", "title": "T"}
        cmd = mock_run.call_args.args[0]
        assert cmd == [
            "yt-dlp",
            "--dump-json",
            "--no-playlist",
            "--cookies-from-browser",
            "chrome",
            URL,
        ]
        assert mock_run.call_args.kwargs["timeout"] == INFO_TIMEOUT_SECONDS

    @patch(RUN)
    def test_auth_required(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(
            returncode=1,
            stderr="ERROR: [youtube] abc123: Sign in to confirm you're not a bot",
        )
        with pytest.raises(AuthenticationRequiredError) as exc_info:
            YtDlpCli(_paths()).fetch_info(URL)
        assert exc_info.value.hint is not None

    @patch(RUN)
    def test_generic_failure_hides_stderr(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=1, stderr="ERROR: Video unavailable")
        with pytest.raises(MetadataExtractionError) as exc_info:
            YtDlpCli(_paths()).fetch_info(URL)
        assert str(exc_info.value) == "Failed to get video information"
        assert "yt-dlp -U" in (exc_info.value.hint or "")

    @patch(RUN)
    def test_debug_failure_includes_stderr(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=1, stderr="ERROR: Video unavailable")
        with pytest.raises(MetadataExtractionError, match="Video unavailable"):
            YtDlpCli(_paths(), debug=True).fetch_info(URL)

    @patch(RUN)
    def test_timeout(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="yt-dlp", timeout=30)
        with pytest.raises(MetadataExtractionError, match="timed out after 30 seconds"):
            YtDlpCli(_paths()).fetch_info(URL)

    @patch(RUN, side_effect=FileNotFoundError("yt-dlp"))
    def test_spawn_error(self, _mock_run: MagicMock) -> None:
        with pytest.raises(DependencyError, match="Failed to spawn"):
            YtDlpCli(_paths()).fetch_info(URL)

    @patch(RUN)
    def test_invalid_json(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout="not json")
        with pytest.raises(MetadataExtractionError, match="Failed to parse"):
            YtDlpCli(_paths()).fetch_info(URL)

    @patch(RUN)
    def test_non_object_json(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout="[1, 2]")
        with pytest.raises(MetadataExtractionError):
            YtDlpCli(_paths()).fetch_info(URL)


# ---------------------------------------------------------------------------
# list_formats
# ---------------------------------------------------------------------------

class TestListFormats:
    @patch(RUN)
    def test_returns_stdout(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(stdout="ID EXT RESOLUTION\n")
        assert YtDlpCli(_paths()).list_formats(URL) == "ID EXT RESOLUTION\n"
        assert mock_run.call_args.args[0][:3] == ["yt-dlp", "--list-formats", "--no-warnings"]

    @patch(RUN)
    def test_failure_returns_output_anyway(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=1, stdout="", stderr="ERROR")
        assert YtDlpCli(_paths()).list_formats(URL) == ""

    @patch(RUN, side_effect=OSError("no such file"))
    def test_spawn_error_returns_empty(self, _mock_run: MagicMock) -> None:
        assert YtDlpCli(_paths()).list_formats(URL) == ""


# ---------------------------------------------------------------------------
# download
# ---------------------------------------------------------------------------

class TestDownload:
    @patch(POPEN)
    def test_progress_forwarded(self, mock_popen: MagicMock) -> None:
        mock_popen.return_value = _popen(
            "[youtube] abc123: Downloading webpage\n"
            "[download] Destination: clip_1080p.f137.mp4\n"
            "[download]  10.0% of 10.00MiB at  1.00MiB/s ETA 00:09\n"
            "[download] 100.0% of 10.00MiB at  2.00MiB/s ETA 00:00\n"
        )
        updates: list[ProgressUpdate] = []
        YtDlpCli(_paths()).download(["--output", "x.mp4", URL], progress_callback=updates.append)

        assert [u.percent for u in updates] == [10.0, 100.0]
        assert updates[1].speed == "2.00MiB/s"
        assert mock_popen.call_args.args[0] == ["yt-dlp", "--output", "x.mp4", URL]
        assert mock_popen.call_args.kwargs["stderr"] == subprocess.STDOUT

    @patch(POPEN)
    def test_without_callback(self, mock_popen: MagicMock) -> None:
        mock_popen.return_value = _popen("[download]  10.0% of 1.00MiB at 1.00MiB/s\n")
        YtDlpCli(_paths()).download([URL])

    @patch(POPEN)
    def test_failure_uses_last_error_line(self, mock_popen: MagicMock) -> None:
        mock_popen.return_value = _popen(
            "[youtube] abc123: Downloading webpage\n"
            "ERROR: first problem\n"
            "ERROR: Requested format is not available\n",
            returncode=1,
        )
        with pytest.raises(DownloadFailedError, match="Requested format is not available") as exc_info:
            YtDlpCli(_paths()).download([URL])
        assert "first problem" in exc_info.value.stderr

    @patch(POPEN)
    def test_failure_without_error_line(self, mock_popen: MagicMock) -> None:
        mock_popen.return_value = _popen("something odd\n", returncode=2)
        with pytest.raises(DownloadFailedError, match="exited with status 2"):
            YtDlpCli(_paths()).download([URL])

    @patch(POPEN, side_effect=FileNotFoundError("yt-dlp"))
    def test_spawn_error(self, _mock_popen: MagicMock) -> None:
        with pytest.raises(DownloadFailedError, match="Failed to spawn"):
            YtDlpCli(_paths()).download([URL])

    @patch(POPEN)
    def test_missing_stdout_pipe(self, mock_popen: MagicMock) -> None:
        process = MagicMock()
        process.stdout = None
        mock_popen.return_value = process
        with pytest.raises(DownloadFailedError, match="Could not read yt-dlp output"):
            YtDlpCli(_paths()).download([URL])
        process.kill.assert_called_once()


# ---------------------------------------------------------------------------
# run_quiet
# ---------------------------------------------------------------------------

class TestRunQuiet:
    @patch(RUN)
    def test_success(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=0)
        assert YtDlpCli(_paths()).run_quiet(["--write-thumbnail", URL]) is True

    @patch(RUN)
    def test_failure(self, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(returncode=1, stderr="ERROR: nope")
        assert YtDlpCli(_paths(), debug=True).run_quiet([URL]) is False

    @patch(RUN, side_effect=OSError("gone"))
    def test_spawn_error(self, _mock_run: MagicMock) -> None:
        assert YtDlpCli(_paths()).run_quiet([URL]) is False
