"""
Report rendering: aligned, severity-colored finding groups.

Output is written in the order groups are produced, straight to the
stream, with no buffering beyond the stream's own.
"""

from __future__ import annotations

import sys
from typing import Iterable, TextIO

from .common import env_flag
from .evaluate import FindingGroup, Section, Severity

USE_COLOR = env_flag("MOTION_DOCTOR_COLOR", default=True)

LABEL_WIDTH = 33
COLS = 80

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"

SEVERITY_COLORS = {
    Severity.GOOD: GREEN,
    Severity.MAYBE: YELLOW,
    Severity.BAD: RED,
}


def colorize(text: str, color: str, use_color: bool | None = None) -> str:
    """Apply color to text.

    Args:
        text: Text to colorize
        color: ANSI color code ("" leaves the text alone)
        use_color: Override for USE_COLOR

    Returns:
        Colored text or plain text if colors disabled
    """
    if use_color is None:
        use_color = USE_COLOR
    if not use_color or not color or not text:
        return text
    return f"{color}{text}{RESET}"


def _fit(label: str, width: int) -> str:
    return label[:width].ljust(width)


def format_finding_group(
    group: FindingGroup,
    label_width: int = LABEL_WIDTH,
    use_color: bool | None = None,
) -> list[str]:
    """Format a group as report lines.

    The label appears once, on the first line. Later values are indented
    to the column where the first value starts.
    """
    lines = []
    for index, finding in enumerate(group.findings):
        if index == 0:
            prefix = f"{_fit(group.label, label_width)}: "
        else:
            prefix = " " * (label_width + 2)

        text = finding.value
        if finding.note and finding.severity is not Severity.GOOD:
            text = f"{text} ({finding.note})"

        color = SEVERITY_COLORS.get(finding.severity, "")
        lines.append(prefix + colorize(text, color, use_color))
    return lines


def print_spacer(fill: str, width: int = COLS, stream: TextIO | None = None) -> None:
    print(fill * width, file=stream or sys.stdout)


def _print_framed(title: str, fill: str, width: int, stream: TextIO | None) -> None:
    out = stream or sys.stdout
    print(file=out)
    print_spacer(fill, width, out)
    print(title, file=out)
    print_spacer(fill, width, out)
    print(file=out)


def print_report_header(title: str, width: int = COLS, stream: TextIO | None = None) -> None:
    _print_framed(title, "=", width, stream)


def print_section_header(title: str, width: int = COLS, stream: TextIO | None = None) -> None:
    _print_framed(title, "-", width, stream)


def print_finding_group(
    group: FindingGroup,
    label_width: int = LABEL_WIDTH,
    use_color: bool | None = None,
    stream: TextIO | None = None,
) -> None:
    out = stream or sys.stdout
    for line in format_finding_group(group, label_width, use_color):
        print(line, file=out)


def render_sections(
    sections: Iterable[Section],
    label_width: int = LABEL_WIDTH,
    columns: int = COLS,
    use_color: bool | None = None,
    stream: TextIO | None = None,
) -> None:
    """Print each section header followed by its groups."""
    for section in sections:
        print_section_header(section.title, columns, stream)
        for group in section.groups:
            print_finding_group(group, label_width, use_color, stream)
