"""Tests for the ``video-downloader doctor`` command (cli/doctor.py).

All external dependencies (ffmpeg, yt-dlp) are mocked — no system
dependency, no internet.

Coverage:
* Individual check functions return correct tuples.
* Doctor returns SUCCESS when yt-dlp is present, GENERAL_ERROR otherwise.
* Plain (no Rich) rendering and ffmpeg guidance.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from video_downloader.cli import exit_codes
from video_downloader.exceptions import DependencyError
from video_downloader.infra.dependencies import FfmpegStatus

DOCTOR = "video_downloader.cli.doctor"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _mock_ffmpeg_found() -> FfmpegStatus:
    return FfmpegStatus(
        found=True,
        path=Path("/usr/bin/ffmpeg"),
        version_hint="found at /usr/bin/ffmpeg",
        install_commands=(),
    )


def _mock_ffmpeg_missing() -> FfmpegStatus:
    return FfmpegStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=("winget install Gyan.FFmpeg",),
    )


@pytest.fixture()
def ytdlp_binary() -> Iterator[None]:
    with (
        patch(f"{DOCTOR}.resolve_ytdlp", return_value=("yt-dlp",)),
        patch(f"{DOCTOR}.ytdlp_version", return_value="2024.08.06"),
    ):
        yield


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from video_downloader.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert value.startswith(f"{sys.version_info[0]}.")
        assert "OK" in status


class TestYtdlpCheck:
    @patch(f"{DOCTOR}.ytdlp_version", return_value="2024.08.06")
    @patch(f"{DOCTOR}.resolve_ytdlp", return_value=("/home/u/.video-downloader/bin/yt-dlp",))
    def test_binary(self, mock_resolve: MagicMock, _mock_version: MagicMock) -> None:
        from video_downloader.cli.doctor import _ytdlp_check

        label, value, status = _ytdlp_check()
        assert label == "yt-dlp"
        assert value == "2024.08.06 (/home/u/.video-downloader/bin/yt-dlp)"
        assert "OK" in status
        assert mock_resolve.call_args.kwargs["install"] is False

    @patch(f"{DOCTOR}.ytdlp_version", return_value=None)
    @patch(f"{DOCTOR}.resolve_ytdlp", return_value=("/usr/bin/python3", "-m", "yt_dlp"))
    def test_python_module(self, _mock_resolve: MagicMock, _mock_version: MagicMock) -> None:
        from video_downloader.cli.doctor import _ytdlp_check

        _label, value, status = _ytdlp_check()
        assert value == "unknown (python module)"
        assert "OK" in status

    @patch(f"{DOCTOR}.resolve_ytdlp", side_effect=DependencyError("missing"))
    def test_not_installed(self, _mock_resolve: MagicMock) -> None:
        from video_downloader.cli.doctor import _ytdlp_check

        label, value, status = _ytdlp_check()
        assert label == "yt-dlp"
        assert value == "NOT INSTALLED"
        assert "FAIL" in status


class TestFfmpegCheck:
    @patch(f"{DOCTOR}.detect_ffmpeg")
    def test_found(self, mock_detect: MagicMock) -> None:
        from video_downloader.cli.doctor import _ffmpeg_check

        mock_detect.return_value = _mock_ffmpeg_found()
        label, value, status = _ffmpeg_check()
        assert label == "ffmpeg"
        assert value == str(Path("/usr/bin/ffmpeg"))
        assert "OK" in status

    @patch(f"{DOCTOR}.detect_ffmpeg")
    def test_missing(self, mock_detect: MagicMock) -> None:
        from video_downloader.cli.doctor import _ffmpeg_check

        mock_detect.return_value = _mock_ffmpeg_missing()
        label, value, status = _ffmpeg_check()
        assert label == "ffmpeg"
        assert "WARN" in status


class TestSettingsCheck:
    def test_defaults_when_missing(self, settings_path: Path) -> None:
        from video_downloader.cli.doctor import _settings_check

        _label, value, status = _settings_check()
        assert value == f"{settings_path} (defaults)"
        assert "OK" in status

    def test_existing_file(self, settings_path: Path) -> None:
        from video_downloader.cli.doctor import _settings_check

        settings_path.write_text("{}", encoding="utf-8")
        _label, value, _status = _settings_check()
        assert value == str(settings_path)


class TestOsCheck:
    def test_returns_tuple(self) -> None:
        from video_downloader.cli.doctor import _os_check

        label, value, status = _os_check()
        assert label == "OS"
        assert isinstance(value, str)
        assert "OK" in status

    @patch(f"{DOCTOR}.platform.machine", return_value="arm64")
    @patch(f"{DOCTOR}.platform.release", return_value="23.4.0")
    @patch(f"{DOCTOR}.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
    ) -> None:
        from video_downloader.cli.doctor import _os_check

        _label, value, _status = _os_check()
        assert value == "macOS 23.4.0 (arm64)"


class TestAppVersionCheck:
    def test_returns_current_version(self) -> None:
        from video_downloader.cli.doctor import _app_version_check
        from video_downloader.version import __version__

        label, value, status = _app_version_check()
        assert label == "video-downloader"
        assert value == __version__
        assert "OK" in status


class TestStatusPlain:
    @pytest.mark.parametrize(
        ("markup", "plain"),
        [("[green]OK[/green]", "OK"), ("[red]FAIL (>=3.10 required)[/red]", "FAIL"), ("?", "?")],
    )
    def test_strips_markup(self, markup: str, plain: str) -> None:
        from video_downloader.cli.doctor import _status_plain

        assert _status_plain(markup) == plain


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    @pytest.mark.usefixtures("ytdlp_binary")
    @patch(f"{DOCTOR}.detect_ffmpeg")
    def test_all_pass_returns_success(self, mock_detect: MagicMock) -> None:
        from video_downloader.cli.doctor import run_doctor

        mock_detect.return_value = _mock_ffmpeg_found()
        assert run_doctor() == exit_codes.SUCCESS

    @pytest.mark.usefixtures("ytdlp_binary")
    @patch(f"{DOCTOR}.detect_ffmpeg")
    def test_ffmpeg_missing_still_succeeds(
        self, mock_detect: MagicMock, capsys: pytest.CaptureFixture[str],
    ) -> None:
        """ffmpeg missing is a WARN, not a FAIL."""
        from video_downloader.cli.doctor import run_doctor

        mock_detect.return_value = _mock_ffmpeg_missing()
        assert run_doctor() == exit_codes.SUCCESS
        assert "winget install Gyan.FFmpeg" in capsys.readouterr().err

    @patch(f"{DOCTOR}.detect_ffmpeg")
    @patch(f"{DOCTOR}.resolve_ytdlp", side_effect=DependencyError("missing"))
    def test_missing_ytdlp_fails(
        self, _mock_resolve: MagicMock, mock_detect: MagicMock, capsys: pytest.CaptureFixture[str],
    ) -> None:
        from video_downloader.cli.doctor import run_doctor

        mock_detect.return_value = _mock_ffmpeg_found()
        assert run_doctor() == exit_codes.GENERAL_ERROR
        assert "Some checks failed." in capsys.readouterr().err

    @pytest.mark.usefixtures("ytdlp_binary")
    @patch(f"{DOCTOR}.platform.machine", return_value="arm64")
    @patch(f"{DOCTOR}.platform.release", return_value="23.4.0")
    @patch(f"{DOCTOR}.platform.system", return_value="Darwin")
    @patch(f"{DOCTOR}.detect_ffmpeg")
    @patch.dict("sys.modules", {"rich": None, "rich.table": None})
    def test_darwin_plain_output_shows_macos_and_brew_guidance(
        self,
        mock_detect: MagicMock,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from video_downloader.cli.doctor import run_doctor

        mock_detect.return_value = FfmpegStatus(
            found=False,
            path=None,
            version_hint="not found",
            install_commands=("brew install ffmpeg",),
        )

        _ = run_doctor()
        captured = capsys.readouterr()
        assert "macOS" in captured.err
        assert "brew install ffmpeg" in captured.err

    @pytest.mark.usefixtures("ytdlp_binary")
    @patch(f"{DOCTOR}.detect_ffmpeg")
    @patch.dict("sys.modules", {"rich": None, "rich.table": None})
    def test_plain_table_layout(
        self,
        mock_detect: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from video_downloader.cli.doctor import run_doctor

        mock_detect.return_value = _mock_ffmpeg_found()
        _ = run_doctor()

        err = capsys.readouterr().err
        assert "video-downloader doctor" in err
        assert "Component" in err
        assert "2024.08.06 (yt-dlp)" in err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

@patch("video_downloader.utils.log.configure_logging")
class TestDoctorRouting:
    @patch(f"{DOCTOR}.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock, _mock_log: MagicMock) -> None:
        from video_downloader.cli.app import main

        code = main(["doctor"])
        assert code == exit_codes.SUCCESS
        mock_run.assert_called_once()

    @patch(f"{DOCTOR}.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, _mock_run: MagicMock, _mock_log: MagicMock) -> None:
        from video_downloader.cli.app import main

        assert main(["doctor"]) == exit_codes.GENERAL_ERROR

    @patch(f"{DOCTOR}.run_doctor", return_value=exit_codes.SUCCESS)
    def test_case_insensitive(self, mock_run: MagicMock, _mock_log: MagicMock) -> None:
        from video_downloader.cli.app import main

        main(["DOCTOR"])
        mock_run.assert_called_once()
