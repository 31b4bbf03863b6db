"""
Toolchain probes.

A probe answers "what is installed" and never "is that acceptable": each
returns one ProbeOutcome variant and never raises. Classification is left
to motion_doctor.evaluate.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Sequence, Union

from .logging_config import get_logger
from .parsers import (
    ParseError,
    parse_javac_version,
    parse_motion_version,
    parse_rbenv_version,
    parse_rbenv_versions,
    parse_xcode_path,
    parse_xcode_select_version,
    parse_xcodebuild_version,
    version_from_name,
)
from .runner import CommandResult, CommandStatus, Runner, run_command

RUBYMOTION_DATA_PATH = "/Library/RubyMotion/data"

# (display name, subdirectory of the RubyMotion data path)
RUBYMOTION_FRAMEWORKS: tuple[tuple[str, str], ...] = (
    ("OSX", "osx"),
    ("iOS", "ios"),
    ("tvOS", "tvos"),
    ("watchOS", "watch"),
    ("Android", "android"),
)


class FailureSource(str, Enum):
    TOOL = "tool"      # the tool ran and reported an error
    SYSTEM = "system"  # the OS could not launch it, or it hung


@dataclass(frozen=True)
class Present:
    value: Any


@dataclass(frozen=True)
class Absent:
    pass


@dataclass(frozen=True)
class ExecutionFailed:
    source: FailureSource
    tool: str
    message: str


@dataclass(frozen=True)
class ParseFailed:
    tool: str
    output: str


ProbeOutcome = Union[Present, Absent, ExecutionFailed, ParseFailed]


def outcome_from_result(
    result: CommandResult,
    tool: str,
    parse: Callable[[CommandResult], Any],
) -> ProbeOutcome:
    """Map a CommandResult to a ProbeOutcome, parsing output on success."""
    if result.status is CommandStatus.SUCCESS:
        try:
            return Present(parse(result))
        except ParseError as e:
            get_logger().info("unrecognized output from %s: %s", result.command, e.reason)
            return ParseFailed(tool, e.text)
    if result.status is CommandStatus.NOT_FOUND:
        return Absent()
    if result.status is CommandStatus.FAILURE:
        message = _one_line(result.stderr) or f"exit code {result.exit_code}"
        return ExecutionFailed(FailureSource.TOOL, tool, message)
    return ExecutionFailed(FailureSource.SYSTEM, tool, result.error)


def _one_line(text: str) -> str:
    # Findings render on a single line
    return " ".join(line.strip() for line in text.splitlines() if line.strip())


def _probe(runner: Runner, args: Sequence[str], parse: Callable[[CommandResult], Any]) -> ProbeOutcome:
    return outcome_from_result(runner(args), args[0], parse)


# RubyMotion
# ----------

def probe_rubymotion(runner: Runner = run_command) -> ProbeOutcome:
    return _probe(runner, ("motion", "--version"), lambda r: parse_motion_version(r.stdout))


def probe_rubymotion_sdks(subdir: str, data_path: str = RUBYMOTION_DATA_PATH) -> ProbeOutcome:
    """List SDK versions installed for one framework.

    Entries are kept in directory-listing order. A missing framework
    directory means no SDKs, not an error.
    """
    framework_path = os.path.join(data_path, subdir)
    try:
        entries = os.listdir(framework_path)
    except (FileNotFoundError, NotADirectoryError):
        return Present(())
    except OSError as e:
        return ExecutionFailed(FailureSource.SYSTEM, framework_path, e.strerror or str(e))

    sdks = []
    for entry in entries:
        version = version_from_name(entry)
        if version is not None and os.path.isdir(os.path.join(framework_path, entry)):
            sdks.append(version)
    return Present(tuple(sdks))


# rbenv
# -----

def probe_rbenv(runner: Runner = run_command) -> ProbeOutcome:
    return _probe(runner, ("rbenv", "--version"), lambda r: parse_rbenv_version(r.stdout))


def probe_rbenv_ruby_versions(runner: Runner, rbenv: ProbeOutcome) -> ProbeOutcome:
    """Rubies supplied by rbenv; empty unless rbenv itself is present."""
    if not isinstance(rbenv, Present):
        return Present(())
    return _probe(runner, ("rbenv", "versions", "--bare"), lambda r: parse_rbenv_versions(r.stdout))


# Xcode
# -----

def probe_xcode_select(runner: Runner = run_command) -> ProbeOutcome:
    return _probe(runner, ("xcode-select", "--version"), lambda r: parse_xcode_select_version(r.stdout))


def probe_xcode_path(runner: Runner, xcode_select: ProbeOutcome) -> ProbeOutcome:
    if not isinstance(xcode_select, Present):
        return Absent()
    return _probe(runner, ("xcode-select", "--print-path"), lambda r: parse_xcode_path(r.stdout))


def probe_xcode(runner: Runner, xcode_path: ProbeOutcome) -> ProbeOutcome:
    # Without a developer directory, xcodebuild only pops up an
    # "install Xcode" dialog.
    if not isinstance(xcode_path, Present):
        return Absent()
    return _probe(runner, ("xcodebuild", "-version"), lambda r: parse_xcodebuild_version(r.stdout))


# Java
# ----

def probe_javac(runner: Runner = run_command) -> ProbeOutcome:
    return _probe(runner, ("javac", "-version"), lambda r: parse_javac_version(r.stderr, r.stdout))


def probe_java_home(environ: Mapping[str, str] | None = None, variable: str = "JAVA_HOME") -> ProbeOutcome:
    if environ is None:
        environ = os.environ
    value = environ.get(variable, "")
    return Present(value) if value else Absent()
