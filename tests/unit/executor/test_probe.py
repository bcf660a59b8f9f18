"""Tests for duration probing."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ffconv.executor import ProbeError, parse_probe_output, probe_duration

FFPROBE = Path("/usr/bin/ffprobe")


class TestParseProbeOutput:
    """Tests for parse_probe_output."""

    def test_plain_number(self) -> None:
        assert parse_probe_output("12.345000\n") == 12.345

    @pytest.mark.parametrize("text", ["", "N/A", "duration=12.3", "nan", "-1", "inf"])
    def test_rejects_non_durations(self, text: str) -> None:
        with pytest.raises(ProbeError):
            parse_probe_output(text)


@patch("ffconv.executor.probe.require_tool", return_value=FFPROBE)
@patch("ffconv.executor.probe.run_command")
class TestProbeDuration:
    """Tests for probe_duration."""

    def test_success(self, mock_run: MagicMock, mock_require: MagicMock) -> None:
        """Runs ffprobe with the synthesized args and parses stdout."""
        mock_run.return_value = ("63.200000\n", "", 0)

        assert probe_duration(Path("/v/in.mov"), timeout=5) == 63.2

        cmd = mock_run.call_args.args[0]
        assert cmd[0] == FFPROBE
        assert cmd[-1] == "/v/in.mov"
        assert "format=duration" in cmd
        assert mock_run.call_args.kwargs["timeout"] == 5

    def test_non_zero_exit(self, mock_run: MagicMock, mock_require: MagicMock) -> None:
        """A failed probe raises ProbeError carrying the exit code."""
        mock_run.return_value = ("", "in.mov: No such file or directory\n", 1)

        with pytest.raises(ProbeError, match="No such file") as exc_info:
            probe_duration("/v/in.mov")
        assert exc_info.value.exit_code == 1

    def test_unparseable_output(
        self, mock_run: MagicMock, mock_require: MagicMock
    ) -> None:
        mock_run.return_value = ("N/A\n", "", 0)
        with pytest.raises(ProbeError, match="Unexpected ffprobe output"):
            probe_duration("/v/in.mov")

    def test_timeout(self, mock_run: MagicMock, mock_require: MagicMock) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="ffprobe", timeout=5)
        with pytest.raises(ProbeError, match="timed out"):
            probe_duration("/v/in.mov", timeout=5)

    def test_os_error(self, mock_run: MagicMock, mock_require: MagicMock) -> None:
        mock_run.side_effect = PermissionError("denied")
        with pytest.raises(ProbeError, match="Could not run ffprobe"):
            probe_duration("/v/in.mov")
