"""
Classification of probe outcomes into severity-tagged findings.

Every evaluator is a pure function: ProbeOutcome (plus context) in, one
FindingGroup out. Evaluators never raise for a failed probe; failures
become BAD findings with an explanatory note.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from .parsers import JavaVersion, Version
from .probes import Absent, ExecutionFailed, FailureSource, ParseFailed, Present, ProbeOutcome


class Severity(str, Enum):
    GOOD = "good"        # success or an acceptable value
    MAYBE = "maybe"      # possible, but not certain, problem
    BAD = "bad"          # failure or a problematic value
    NEUTRAL = "neutral"  # informational


@dataclass(frozen=True)
class Finding:
    """One reportable line.

    Attributes:
        value: Display string
        severity: Classification of the value
        note: Explanation shown next to MAYBE/BAD values
    """
    value: str
    severity: Severity = Severity.GOOD
    note: str | None = None

    def refine(self, severity: Severity, note: str | None = None) -> Finding:
        """Return a copy with a new severity and, if given, a new note."""
        return dataclasses.replace(self, severity=severity, note=note if note is not None else self.note)


NONE_FINDING = Finding("None", Severity.NEUTRAL)


@dataclass(frozen=True)
class FindingGroup:
    """Findings sharing one report label. Never empty: see NONE_FINDING."""
    label: str
    findings: tuple[Finding, ...] = ()

    def __post_init__(self):
        findings = tuple(self.findings) or (NONE_FINDING,)
        object.__setattr__(self, "findings", findings)

    @property
    def worst(self) -> Severity:
        for severity in (Severity.BAD, Severity.MAYBE, Severity.GOOD):
            if any(f.severity is severity for f in self.findings):
                return severity
        return Severity.NEUTRAL


@dataclass(frozen=True)
class Section:
    title: str
    groups: tuple[FindingGroup, ...] = ()


def group(label: str, findings: Iterable[Finding] = ()) -> FindingGroup:
    return FindingGroup(label, tuple(findings))


# Expected Xcode release for each RubyMotion major.minor.
COMPATIBILITY_BASELINE: Mapping[Version, Version] = MappingProxyType({
    Version(5, 7): Version(9, 2, 0),
    Version(5, 8): Version(9, 3, 0),
    Version(5, 9): Version(9, 4, 0),
    Version(5, 10): Version(9, 4, 0),
})

EXPECTED_XCODE_SELECT_BUILD = 2349


# Shared outcome handling
# -----------------------

def failure_finding(outcome: ProbeOutcome) -> Finding | None:
    """BAD finding for ExecutionFailed/ParseFailed outcomes, else None."""
    if isinstance(outcome, ExecutionFailed):
        reporter = outcome.tool if outcome.source is FailureSource.TOOL else "system"
        return Finding("Failed", Severity.BAD, f"{reporter} reports: '{outcome.message}'")
    if isinstance(outcome, ParseFailed):
        first_line = outcome.output.strip().splitlines()[0] if outcome.output.strip() else ""
        return Finding("Unrecognized output", Severity.BAD,
                       f"could not parse {outcome.tool} output: '{first_line}'")
    return None


def _unexpected(outcome: ProbeOutcome) -> TypeError:
    return TypeError(f"unexpected probe outcome: {outcome!r}")


def _versions_group(label: str, outcome: ProbeOutcome) -> FindingGroup:
    failed = failure_finding(outcome)
    if failed:
        return group(label, [failed])
    if isinstance(outcome, Absent):
        return group(label)
    if isinstance(outcome, Present):
        return group(label, (Finding(v.short(), Severity.NEUTRAL) for v in outcome.value))
    raise _unexpected(outcome)


# RubyMotion
# ----------

def evaluate_rubymotion_version(outcome: ProbeOutcome) -> FindingGroup:
    label = "RubyMotion version"
    failed = failure_finding(outcome)
    if failed:
        return group(label, [failed])
    if isinstance(outcome, Absent):
        return group(label, [Finding("Not found", Severity.BAD)])
    if isinstance(outcome, Present):
        version: Version = outcome.value
        return group(label, [Finding(f"{version.major}.{version.minor}", Severity.NEUTRAL)])
    raise _unexpected(outcome)


def evaluate_rubymotion_sdks(outcome: ProbeOutcome, framework_name: str) -> FindingGroup:
    return _versions_group(f"Supported {framework_name} frameworks", outcome)


# rbenv
# -----

def evaluate_rbenv_version(outcome: ProbeOutcome) -> FindingGroup:
    label = "rbenv version"
    # rbenv is optional, but a broken one is still a problem
    failed = failure_finding(outcome)
    if failed:
        return group(label, [failed])
    if isinstance(outcome, Absent):
        return group(label, [Finding("Not found", Severity.MAYBE, "Recommended, but not required")])
    if isinstance(outcome, Present):
        return group(label, [Finding(str(outcome.value), Severity.NEUTRAL)])
    raise _unexpected(outcome)


def evaluate_rbenv_ruby_versions(outcome: ProbeOutcome) -> FindingGroup:
    label = "rbenv-supplied Ruby versions"
    failed = failure_finding(outcome)
    if failed:
        return group(label, [failed])
    if isinstance(outcome, Present):
        return group(label, (Finding(str(v), Severity.NEUTRAL) for v in outcome.value))
    if isinstance(outcome, Absent):
        return group(label)
    raise _unexpected(outcome)


# Xcode
# -----

def expected_xcode_version(
    rubymotion: ProbeOutcome,
    baseline: Mapping[Version, Version] = COMPATIBILITY_BASELINE,
) -> Version:
    """Xcode version paired with the detected RubyMotion release.

    Falls back to the newest baseline entry when RubyMotion is missing or
    its release is not in the table.
    """
    if isinstance(rubymotion, Present):
        expected = baseline.get(rubymotion.value.major_minor)
        if expected is not None:
            return expected
    return baseline[max(baseline)]


def classify_compatibility(actual: Version, expected: Version) -> Severity:
    if actual == expected:
        return Severity.GOOD
    # A newer patch of the expected release is tolerated.
    if (actual.major == expected.major
            and actual.minor == expected.minor
            and actual.patch > expected.patch):
        return Severity.MAYBE
    return Severity.BAD


def evaluate_xcode_version(
    outcome: ProbeOutcome,
    rubymotion: ProbeOutcome,
    baseline: Mapping[Version, Version] = COMPATIBILITY_BASELINE,
) -> FindingGroup:
    label = "Xcode version"
    failed = failure_finding(outcome)
    if failed:
        return group(label, [failed])
    if isinstance(outcome, Absent):
        return group(label, [Finding("Not installed", Severity.BAD)])
    if not isinstance(outcome, Present):
        raise _unexpected(outcome)

    actual: Version = outcome.value
    expected = expected_xcode_version(rubymotion, baseline)
    finding = Finding(actual.short())
    severity = classify_compatibility(actual, expected)
    if severity is not Severity.GOOD:
        finding = finding.refine(severity, f"expected {expected}")
    return group(label, [finding])


def evaluate_xcode_select_version(
    outcome: ProbeOutcome,
    expected_build: int = EXPECTED_XCODE_SELECT_BUILD,
) -> FindingGroup:
    label = "xcode-select version"
    failed = failure_finding(outcome)
    if failed:
        return group(label, [failed])
    if isinstance(outcome, Absent):
        return group(label, [Finding("Not found", Severity.BAD)])
    if not isinstance(outcome, Present):
        raise _unexpected(outcome)

    # Every Xcode release RubyMotion pairs with (9.2 onward) ships build 2349.
    finding = Finding(str(outcome.value))
    if outcome.value != expected_build:
        finding = finding.refine(Severity.BAD, f"expected {expected_build}")
    return group(label, [finding])


def classify_xcode_path(path: str) -> Finding:
    if "CommandLineTools" in path:
        return Finding(path, Severity.BAD, "path indicates a CLI-tool-only Xcode installation")
    if "Xcode-beta.app" in path:
        return Finding(path, Severity.MAYBE, "path indicates a beta Xcode installation")
    if "Xcode.app" in path:
        return Finding(path, Severity.GOOD)
    # xcode-select -s refuses invalid paths, but a custom one may still
    # hold an unsuitable Xcode.
    return Finding(path, Severity.MAYBE, "custom path detected")


def evaluate_xcode_path(outcome: ProbeOutcome) -> FindingGroup:
    label = "Xcode path"
    failed = failure_finding(outcome)
    if failed:
        return group(label, [failed])
    if isinstance(outcome, Absent):
        return group(label, [Finding("Not installed", Severity.BAD)])
    if isinstance(outcome, Present):
        return group(label, [classify_xcode_path(outcome.value)])
    raise _unexpected(outcome)


# Java
# ----

def evaluate_java_version(outcome: ProbeOutcome) -> FindingGroup:
    label = "Java version"
    failed = failure_finding(outcome)
    if failed:
        return group(label, [failed])
    if isinstance(outcome, Absent):
        return group(label, [Finding("Not found", Severity.BAD)])
    if isinstance(outcome, Present):
        version: JavaVersion = outcome.value
        return group(label, [Finding(str(version), Severity.NEUTRAL)])
    raise _unexpected(outcome)


def evaluate_java_home(outcome: ProbeOutcome) -> FindingGroup:
    label = "Java home"
    if isinstance(outcome, Present):
        return group(label, [Finding(outcome.value, Severity.NEUTRAL)])
    if isinstance(outcome, Absent):
        return group(label, [Finding("Not set", Severity.BAD)])
    raise _unexpected(outcome)
