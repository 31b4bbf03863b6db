"""
Shared fixtures: a scripted command runner standing in for subprocess.
"""

from typing import Sequence

import pytest

from motion_doctor.runner import CommandResult, CommandStatus


def ok(args: Sequence[str], stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(tuple(args), CommandStatus.SUCCESS, stdout, stderr, 0)


def failed(args: Sequence[str], stderr: str = "", exit_code: int = 1) -> CommandResult:
    return CommandResult(tuple(args), CommandStatus.FAILURE, "", stderr, exit_code)


def sys_failed(args: Sequence[str], error: str) -> CommandResult:
    return CommandResult(tuple(args), CommandStatus.SYS_FAILURE, error=error)


def timed_out(args: Sequence[str]) -> CommandResult:
    return CommandResult(
        tuple(args), CommandStatus.TIMED_OUT,
        error=f"`{' '.join(args)}` timed out after 10 seconds",
    )


class FakeRunner:
    """Returns scripted results; unknown commands are NOT_FOUND."""

    def __init__(self, results: Sequence[CommandResult] = ()):
        self.results = {r.args: r for r in results}
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, args: Sequence[str]) -> CommandResult:
        argv = tuple(args)
        self.calls.append(argv)
        if argv in self.results:
            return self.results[argv]
        return CommandResult(argv, CommandStatus.NOT_FOUND, error=f"No such file or directory: '{argv[0]}'")


HEALTHY_MACHINE = (
    ok(("sw_vers",), "ProductName:\tMac OS X\nProductVersion:\t10.13.6\nBuildVersion:\t17G65\n"),
    ok(("motion", "--version"), "5.9\n"),
    ok(("rbenv", "--version"), "rbenv 1.1.1\n"),
    ok(("rbenv", "versions", "--bare"), "2.4.4\n2.5.1\n"),
    ok(("xcode-select", "--version"), "xcode-select version 2349.\n"),
    ok(("xcode-select", "--print-path"), "/Applications/Xcode.app/Contents/Developer\n"),
    ok(("xcodebuild", "-version"), "Xcode 9.4\nBuild version 9F1027a\n"),
    ok(("javac", "-version"), stderr="javac 1.8.0_171\n"),
)


@pytest.fixture
def healthy_runner() -> FakeRunner:
    return FakeRunner(HEALTHY_MACHINE)
