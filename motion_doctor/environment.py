"""
Host environment probes: macOS version and working directory.
"""

from __future__ import annotations

import dataclasses
import os

from .evaluate import Finding, FindingGroup, Severity, failure_finding, group
from .parsers import OSVersion, Version, parse_sw_vers
from .probes import Absent, Present, ProbeOutcome, outcome_from_result
from .runner import Runner, run_command

# Oldest macOS release RubyMotion supports (Sierra).
MINIMUM_OSX = Version(10, 12)


def probe_osx(runner: Runner = run_command) -> ProbeOutcome:
    return outcome_from_result(runner(("sw_vers",)), "sw_vers", lambda r: parse_sw_vers(r.stdout))


def probe_working_directory() -> str:
    return os.getcwd()


def evaluate_osx_version(outcome: ProbeOutcome, minimum: Version = MINIMUM_OSX) -> FindingGroup:
    """Informational unless the release predates `minimum`."""
    label = "OSX version"
    failed = failure_finding(outcome)
    if failed:
        return group(label, [dataclasses.replace(failed, value="Indeterminate")])
    if isinstance(outcome, Absent):
        return group(label, [Finding("Indeterminate", Severity.BAD, "`sw_vers` not found")])
    if not isinstance(outcome, Present):
        raise TypeError(f"unexpected probe outcome: {outcome!r}")

    osx: OSVersion = outcome.value
    finding = Finding(str(osx), Severity.NEUTRAL)
    if osx.version.major_minor < minimum.major_minor:
        finding = finding.refine(Severity.BAD, f"{minimum.short()} or later required")
    return group(label, [finding])


def evaluate_working_directory(path: str) -> FindingGroup:
    return group("Working directory", [Finding(path, Severity.NEUTRAL)])
