"""
Version extraction from free-form tool output.

Each tool has its own output shape. Parsers raise ParseError when the text
does not match instead of guessing a zero version.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .logging_config import get_logger

DOTTED_VERSION_RE = re.compile(r"^\d+(\.\d+)*$")
MOTION_VERSION_RE = re.compile(r"^(\d+)\.(\d+)$")
LEADING_INT_RE = re.compile(r"^(\d+)")
XCODE_SELECT_RE = re.compile(r"^xcode-select version (\d+)\.?$")
JAVAC_VERSION_RE = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+)(?:_(\d+))?)?(?:[-+]\S*)?$")
SW_VERS_PRODUCT_RE = re.compile(r"^ProductVersion:\s*(\S+)")
SW_VERS_BUILD_RE = re.compile(r"^BuildVersion:\s*(\w+)")

OSX_CODE_NAMES = {
    "10.0": "Cheetah",
    "10.1": "Puma",
    "10.2": "Jaguar",
    "10.3": "Panther",
    "10.4": "Tiger",
    "10.5": "Leopard",
    "10.6": "Snow Leopard",
    "10.7": "Lion",
    "10.8": "Mountain Lion",
    "10.9": "Mavericks",
    "10.10": "Yosemite",
    "10.11": "El Capitan",
    "10.12": "Sierra",
    "10.13": "High Sierra",
    "10.14": "Mojave",
    "10.15": "Catalina",
    "11": "Big Sur",
    "12": "Monterey",
    "13": "Ventura",
    "14": "Sonoma",
    "15": "Sequoia",
}


class ParseError(ValueError):
    """Tool output did not have the expected shape."""

    def __init__(self, tool: str, text: str, reason: str):
        self.tool = tool
        self.text = text
        self.reason = reason
        super().__init__(f"{tool}: {reason}: {text!r}")


@dataclass(frozen=True, order=True)
class Version:
    """A major.minor.patch version."""
    major: int
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def short(self) -> str:
        """Drop trailing zero components after the major: 9.4.0 -> 9.4, 10.0 -> 10."""
        parts = [self.major, self.minor, self.patch]
        while len(parts) > 1 and parts[-1] == 0:
            parts.pop()
        return ".".join(str(p) for p in parts)

    @property
    def major_minor(self) -> Version:
        return Version(self.major, self.minor)


@dataclass(frozen=True)
class JavaVersion:
    """A JDK version, e.g. 1.8.0_171 (build 171) or 11.0.2 (no build)."""
    major: int
    minor: int = 0
    patch: int = 0
    build: int = 0

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}_{self.build}" if self.build else base


@dataclass(frozen=True)
class OSVersion:
    """A macOS product version plus its build identifier."""
    major: int
    minor: int
    patch: int = 0
    build: str = ""
    code_name: str | None = None

    @property
    def version(self) -> Version:
        return Version(self.major, self.minor, self.patch)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}"
        if self.patch > 0:
            text += f".{self.patch}"
        if self.code_name:
            text += f" ({self.code_name})"
        return text


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


def _dotted(tool: str, token: str, text: str) -> Version:
    """Dot-split a token, using the leading digits of each component."""
    components = []
    for part in token.split(".")[:3]:
        m = LEADING_INT_RE.match(part)
        if not m:
            raise ParseError(tool, text, f"non-numeric version component {part!r}")
        components.append(int(m.group(1)))
    return Version(*components)


def version_from_name(name: str) -> Version | None:
    """Parse a plain dotted name such as "12.1". Returns None for anything else."""
    if not DOTTED_VERSION_RE.match(name):
        return None
    return Version(*(int(p) for p in name.split(".")[:3]))


def parse_motion_version(stdout: str) -> Version:
    """`motion --version` prints e.g. "5.9"."""
    for token in _first_line(stdout).split():
        m = MOTION_VERSION_RE.match(token)
        if m:
            return Version(int(m.group(1)), int(m.group(2)))
    raise ParseError("motion", stdout, "no major.minor version on first line")


def parse_rbenv_version(stdout: str) -> Version:
    """`rbenv --version` prints e.g. "rbenv 1.1.2" or "rbenv 1.2.0-16-gc4395e5"."""
    tokens = stdout.split()
    if len(tokens) < 2:
        raise ParseError("rbenv", stdout, "expected 'rbenv <version>'")
    return _dotted("rbenv", tokens[1], stdout)


def parse_rbenv_versions(stdout: str) -> tuple[Version, ...]:
    """`rbenv versions --bare` prints one installed Ruby per line."""
    versions = []
    for line in stdout.splitlines():
        name = line.strip()
        if not name:
            continue
        version = version_from_name(name)
        if version is None:
            get_logger().debug("skipping non-MRI rbenv version %r", name)
            continue
        versions.append(version)
    return tuple(versions)


def parse_xcode_select_version(stdout: str) -> int:
    """`xcode-select --version` prints e.g. "xcode-select version 2349."."""
    m = XCODE_SELECT_RE.match(_first_line(stdout))
    if not m:
        raise ParseError("xcode-select", stdout, "expected 'xcode-select version <build>.'")
    return int(m.group(1))


def parse_xcode_path(stdout: str) -> str:
    path = _first_line(stdout)
    if not path:
        raise ParseError("xcode-select", stdout, "empty developer directory")
    return path


def parse_xcodebuild_version(stdout: str) -> Version:
    """`xcodebuild -version` prints "Xcode 9.4.1" then "Build version 9F2000"."""
    tokens = _first_line(stdout).split()
    if len(tokens) < 2:
        raise ParseError("xcodebuild", stdout, "expected 'Xcode <version>'")
    return _dotted("xcodebuild", tokens[1], stdout)


def parse_javac_version(stderr: str, stdout: str = "") -> JavaVersion:
    """`javac -version` prints "javac 1.8.0_171" on stderr.

    JDK 9+ moved the line to stdout, so stdout is used when stderr is empty.
    """
    text = stderr if stderr.strip() else stdout
    tokens = _first_line(text).split()
    if len(tokens) < 2:
        raise ParseError("javac", text, "expected 'javac <version>'")
    m = JAVAC_VERSION_RE.match(tokens[1])
    if not m:
        raise ParseError("javac", text, f"unrecognized version {tokens[1]!r}")
    major, minor, patch, build = (int(g) if g else 0 for g in m.groups())
    return JavaVersion(major, minor, patch, build)


def osx_code_name(major: int, minor: int) -> str | None:
    return OSX_CODE_NAMES.get(f"{major}.{minor}") or (
        OSX_CODE_NAMES.get(str(major)) if major >= 11 else None
    )


def parse_sw_vers(stdout: str) -> OSVersion:
    """`sw_vers` prints ProductName, ProductVersion and BuildVersion lines."""
    lines = stdout.splitlines()
    if len(lines) < 3:
        raise ParseError("sw_vers", stdout, "expected at least three lines")

    product = SW_VERS_PRODUCT_RE.match(lines[1].strip())
    build = SW_VERS_BUILD_RE.match(lines[2].strip())
    if not product or not build:
        raise ParseError("sw_vers", stdout, "missing ProductVersion/BuildVersion")

    version = _dotted("sw_vers", product.group(1), stdout)
    return OSVersion(
        major=version.major,
        minor=version.minor,
        patch=version.patch,
        build=build.group(1),
        code_name=osx_code_name(version.major, version.minor),
    )
