"""
motion-doctor - RubyMotion toolchain health diagnostics.

Core Modules:
- Probing: command runner, version parsers, toolchain and environment probes
- Evaluation: severity classification against known-good versions
- Reporting: aligned, severity-colored report rendering
- Foundation: configuration and logging
"""

__version__ = "1.0.0"

VERSION = __version__

# Probing
from .runner import CommandResult, CommandStatus, run_command, make_runner
from .parsers import ParseError, Version, JavaVersion, OSVersion
from .probes import (
    Present,
    Absent,
    ExecutionFailed,
    ParseFailed,
    FailureSource,
    ProbeOutcome,
)

# Evaluation
from .evaluate import (
    Severity,
    Finding,
    FindingGroup,
    Section,
    COMPATIBILITY_BASELINE,
    classify_compatibility,
    classify_xcode_path,
)

# Reporting
from .render import format_finding_group, render_sections
from .pipeline import run_doctor

# Foundation
from .config import Config, load_config, validate_config
from .logging_config import setup_logging, get_logger

__all__ = [
    "__version__",
    "VERSION",
    # Probing
    "CommandResult",
    "CommandStatus",
    "run_command",
    "make_runner",
    "ParseError",
    "Version",
    "JavaVersion",
    "OSVersion",
    "Present",
    "Absent",
    "ExecutionFailed",
    "ParseFailed",
    "FailureSource",
    "ProbeOutcome",
    # Evaluation
    "Severity",
    "Finding",
    "FindingGroup",
    "Section",
    "COMPATIBILITY_BASELINE",
    "classify_compatibility",
    "classify_xcode_path",
    # Reporting
    "format_finding_group",
    "render_sections",
    "run_doctor",
    # Foundation
    "Config",
    "load_config",
    "validate_config",
    "setup_logging",
    "get_logger",
]
