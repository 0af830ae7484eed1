"""Unit tests for the ffprobe duration probe."""

import pytest
import subprocess
from unittest.mock import Mock, patch

from recaudit.probe import FFprobeDurationProbe, ProbeError, ProbeUnavailableError
from recaudit.probe.ffprobe import parse_duration


def completed(stdout: str, returncode: int = 0) -> Mock:
    return Mock(stdout=stdout, returncode=returncode)


@pytest.mark.unit
class TestFFprobeDurationProbe:
    """Test cases for FFprobeDurationProbe class."""

    def test_command_line(self):
        probe = FFprobeDurationProbe()

        assert probe.build_command("record/a.mp4") == [
            "ffprobe", "-v", "error", "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1", "record/a.mp4",
        ]

    def test_duration_is_truncated(self):
        probe = FFprobeDurationProbe()

        with patch("subprocess.run", return_value=completed("  299.97\n")) as mock_run:
            assert probe.get_duration("a.mp4") == 299

        kwargs = mock_run.call_args.kwargs
        assert kwargs["stderr"] == subprocess.STDOUT
        assert kwargs["timeout"] is None

    def test_empty_output_is_zero(self):
        probe = FFprobeDurationProbe()

        with patch("subprocess.run", return_value=completed("\n")):
            assert probe.get_duration("a.mp4") == 0

    def test_nonzero_exit(self):
        probe = FFprobeDurationProbe()

        with patch("subprocess.run", return_value=completed("a.mp4: Invalid data", returncode=1)):
            with pytest.raises(ProbeError) as exc_info:
                probe.get_duration("a.mp4")

        assert "Invalid data" in str(exc_info.value)
        assert exc_info.value.path == "a.mp4"

    def test_unparsable_output(self):
        probe = FFprobeDurationProbe()

        with patch("subprocess.run", return_value=completed("N/A")):
            with pytest.raises(ProbeError):
                probe.get_duration("a.mp4")

    def test_missing_executable(self):
        probe = FFprobeDurationProbe(command="no-such-ffprobe")

        with patch("subprocess.run", side_effect=FileNotFoundError(2, "No such file or directory")):
            with pytest.raises(ProbeUnavailableError) as exc_info:
                probe.get_duration("a.mp4")

        assert exc_info.value.command == "no-such-ffprobe"
        assert not isinstance(exc_info.value, ProbeError)

    @pytest.mark.parametrize("error", [
        PermissionError(13, "Permission denied"),
        OSError(8, "Exec format error"),
    ])
    def test_launch_failure(self, error):
        probe = FFprobeDurationProbe(command="/etc/hostname")

        with patch("subprocess.run", side_effect=error):
            with pytest.raises(ProbeUnavailableError):
                probe.get_duration("a.mp4")

    def test_timeout(self):
        probe = FFprobeDurationProbe(timeout_seconds=5)

        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("ffprobe", 5)) as mock_run:
            with pytest.raises(ProbeError):
                probe.get_duration("a.mp4")

        assert mock_run.call_args.kwargs["timeout"] == 5


@pytest.mark.unit
def test_parse_duration_rejects_nan():
    with pytest.raises(ProbeError):
        parse_duration("a.mp4", "nan")
