"""
Tests for command execution (motion_doctor/runner.py).
"""

import subprocess
import sys
from unittest.mock import patch

import pytest

from motion_doctor.runner import (
    CommandResult,
    CommandStatus,
    make_runner,
    run_command,
)


class TestRunCommandClassification:
    """Tests for exit-code and launch-error classification."""

    @patch("motion_doctor.runner.subprocess.run")
    def test_exit_zero_is_success(self, mock_run):
        """Test exit code 0 maps to SUCCESS with captured output."""
        mock_run.return_value = subprocess.CompletedProcess(["motion"], 0, "5.9\n", "")
        result = run_command(["motion", "--version"])
        assert result.status is CommandStatus.SUCCESS
        assert result.stdout == "5.9\n"
        assert result.exit_code == 0
        assert result.succeeded
        assert result.executed

    @patch("motion_doctor.runner.subprocess.run")
    def test_nonzero_exit_is_failure(self, mock_run):
        """Test a non-zero exit code maps to FAILURE and keeps stderr."""
        mock_run.return_value = subprocess.CompletedProcess(["rbenv"], 1, "", "rbenv: no such command\n")
        result = run_command(["rbenv", "versions", "--bare"])
        assert result.status is CommandStatus.FAILURE
        assert result.exit_code == 1
        assert result.stderr == "rbenv: no such command\n"
        assert not result.succeeded
        assert result.executed

    @patch("motion_doctor.runner.subprocess.run", side_effect=FileNotFoundError(2, "No such file or directory"))
    def test_missing_executable_is_not_found(self, mock_run):
        """Test FileNotFoundError maps to NOT_FOUND, not SYS_FAILURE."""
        result = run_command(["javac", "-version"])
        assert result.status is CommandStatus.NOT_FOUND
        assert result.exit_code is None
        assert not result.executed

    @patch("motion_doctor.runner.subprocess.run", side_effect=PermissionError(13, "Permission denied"))
    def test_other_os_error_is_sys_failure(self, mock_run):
        """Test other OSErrors map to SYS_FAILURE carrying the OS message."""
        result = run_command(["xcodebuild", "-version"])
        assert result.status is CommandStatus.SYS_FAILURE
        assert result.error == "Permission denied"

    @patch("motion_doctor.runner.subprocess.run")
    def test_timeout_is_timed_out(self, mock_run):
        """Test TimeoutExpired maps to TIMED_OUT with a readable message."""
        mock_run.side_effect = subprocess.TimeoutExpired(["xcodebuild", "-version"], 5)
        result = run_command(["xcodebuild", "-version"], timeout=5)
        assert result.status is CommandStatus.TIMED_OUT
        assert "timed out after 5 seconds" in result.error

    @patch("motion_doctor.runner.subprocess.run")
    def test_stdin_isolated_and_timeout_passed(self, mock_run):
        """Test the subprocess gets no stdin and the requested timeout."""
        mock_run.return_value = subprocess.CompletedProcess(["sw_vers"], 0, "", "")
        run_command(["sw_vers"], timeout=3)
        kwargs = mock_run.call_args.kwargs
        assert kwargs["stdin"] == subprocess.DEVNULL
        assert kwargs["timeout"] == 3
        assert kwargs["env"]["TERM"] == "dumb"
        assert kwargs["errors"] == "replace"


class TestRunCommandReal:
    """Tests against real processes."""

    def test_real_failure_captures_stderr_and_exit_code(self):
        """Test a real child process with non-zero exit."""
        result = run_command([sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"])
        assert result.status is CommandStatus.FAILURE
        assert result.exit_code == 3
        assert result.stderr == "bad"

    def test_real_undecodable_output_is_replaced(self):
        """Test invalid bytes on stdout do not escape as UnicodeDecodeError."""
        script = "import sys; sys.stdout.buffer.write(b'RubyMotion \\xff\\xfe 5.9\\n')"
        result = run_command([sys.executable, "-c", script])
        assert result.status is CommandStatus.SUCCESS
        assert result.stdout.startswith("RubyMotion ")
        assert result.stdout.rstrip().endswith(" 5.9")

    def test_real_missing_binary(self):
        """Test a binary that does not exist is NOT_FOUND."""
        result = run_command(["motion-doctor-no-such-tool-4f1c"])
        assert result.status is CommandStatus.NOT_FOUND


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_command_string(self):
        result = CommandResult(("rbenv", "versions", "--bare"), CommandStatus.SUCCESS)
        assert result.command == "rbenv versions --bare"

    def test_immutable(self):
        result = CommandResult(("sw_vers",), CommandStatus.SUCCESS)
        with pytest.raises(AttributeError):
            result.stdout = "changed"


class TestMakeRunner:
    """Tests for timeout binding."""

    @patch("motion_doctor.runner.run_command")
    def test_timeout_bound(self, mock_run):
        runner = make_runner(7)
        runner(["motion", "--version"])
        mock_run.assert_called_once_with(["motion", "--version"], timeout=7)

    @patch("motion_doctor.runner.run_command")
    def test_zero_disables_timeout(self, mock_run):
        runner = make_runner(0)
        runner(["motion", "--version"])
        mock_run.assert_called_once_with(["motion", "--version"], timeout=None)
