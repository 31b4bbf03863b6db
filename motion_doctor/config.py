"""
Configuration file parsing and management.

Supports YAML configuration files (and plain JSON files by extension).
Merges configurations from multiple sources (project → user → system → defaults).
"""

from __future__ import annotations

import dataclasses
import json
import os
from dataclasses import dataclass, field
from typing import Any

import yaml

from .common import vlog
from .parsers import Version, version_from_name


# Configuration file locations (in priority order)
CONFIG_LOCATIONS = [
    ".motion-doctor.yml",
    ".motion-doctor.yaml",
    os.path.expanduser("~/.config/motion-doctor/config.yml"),
    os.path.expanduser("~/.config/motion-doctor/config.yaml"),
    "/etc/motion-doctor/config.yml",
    "/etc/motion-doctor/config.yaml",
]


@dataclass(frozen=True)
class ReportPreferences:
    """
    Report layout.

    Attributes:
        label_width: Column width reserved for group labels
        columns: Width of header rules
        color: Whether to color values by severity
    """
    label_width: int = 33
    columns: int = 80
    color: bool = True

    def __post_init__(self):
        if self.label_width < 10 or self.label_width > 60:
            raise ValueError(
                f"Invalid label_width: {self.label_width}. Must be between 10 and 60"
            )
        if self.columns < 40 or self.columns > 200:
            raise ValueError(
                f"Invalid columns: {self.columns}. Must be between 40 and 200"
            )

    @staticmethod
    def from_dict(data: dict[str, Any]) -> ReportPreferences:
        return ReportPreferences(
            label_width=data.get("label_width", 33),
            columns=data.get("columns", 80),
            color=data.get("color", True),
        )


@dataclass(frozen=True)
class ProbePreferences:
    """
    Probe behavior.

    Attributes:
        timeout_seconds: Per-command timeout (0 disables it)
        rubymotion_data_path: Directory holding per-framework SDK folders
        java_home_variable: Environment variable naming the JDK root
    """
    timeout_seconds: int = 10
    rubymotion_data_path: str = "/Library/RubyMotion/data"
    java_home_variable: str = "JAVA_HOME"

    def __post_init__(self):
        if self.timeout_seconds < 0 or self.timeout_seconds > 300:
            raise ValueError(
                f"Invalid timeout_seconds: {self.timeout_seconds}. "
                "Must be between 0 and 300"
            )
        if not self.java_home_variable:
            raise ValueError("java_home_variable must not be empty")

    @staticmethod
    def from_dict(data: dict[str, Any]) -> ProbePreferences:
        return ProbePreferences(
            timeout_seconds=data.get("timeout_seconds", 10),
            rubymotion_data_path=data.get("rubymotion_data_path", "/Library/RubyMotion/data"),
            java_home_variable=data.get("java_home_variable", "JAVA_HOME"),
        )


@dataclass(frozen=True)
class Expectations:
    """
    Known-good values the evaluators compare against.

    Attributes:
        xcode_select_build: Expected `xcode-select --version` build number
        minimum_osx: Oldest supported macOS release ("major.minor")
    """
    xcode_select_build: int = 2349
    minimum_osx: str = "10.12"

    def __post_init__(self):
        if version_from_name(self.minimum_osx) is None:
            raise ValueError(
                f"Invalid minimum_osx: {self.minimum_osx}. Must look like '10.12'"
            )

    @property
    def minimum_osx_version(self) -> Version:
        return version_from_name(self.minimum_osx)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Expectations:
        minimum_osx = data.get("minimum_osx", "10.12")
        # YAML reads an unquoted 10.10 as the float 10.1
        if not isinstance(minimum_osx, str):
            raise ValueError(
                f"Invalid minimum_osx: {minimum_osx!r}. Must be a quoted string like '10.12'"
            )
        return Expectations(
            xcode_select_build=int(data.get("xcode_select_build", 2349)),
            minimum_osx=minimum_osx,
        )


@dataclass(frozen=True)
class Config:
    """
    Complete configuration for motion-doctor.

    Attributes:
        version: Config schema version
        report: Report layout preferences
        probes: Probe preferences
        expectations: Known-good values
        source: Path to the configuration file that was loaded
    """
    version: int = 1
    report: ReportPreferences = field(default_factory=ReportPreferences)
    probes: ProbePreferences = field(default_factory=ProbePreferences)
    expectations: Expectations = field(default_factory=Expectations)
    source: str = ""

    def __post_init__(self):
        if self.version != 1:
            raise ValueError(f"Unsupported config version: {self.version}. Expected version 1")

    @staticmethod
    def from_dict(data: dict[str, Any], source: str = "") -> Config:
        return Config(
            version=data.get("version", 1),
            report=ReportPreferences.from_dict(data.get("report") or {}),
            probes=ProbePreferences.from_dict(data.get("probes") or {}),
            expectations=Expectations.from_dict(data.get("expectations") or {}),
            source=source,
        )

    def merge_with(self, other: Config) -> Config:
        """
        Merge this config with another, preferring values from this config.

        A field keeps this config's value unless it is still the default,
        in which case the other config's value is used.

        Args:
            other: Other config to merge (lower priority)

        Returns:
            New merged Config object
        """
        return Config(
            version=self.version,
            report=_merge_section(self.report, other.report),
            probes=_merge_section(self.probes, other.probes),
            expectations=_merge_section(self.expectations, other.expectations),
            source=self.source or other.source,
        )


def _merge_section(preferred: Any, fallback: Any) -> Any:
    defaults = type(preferred)()
    values = {}
    for f in dataclasses.fields(preferred):
        mine = getattr(preferred, f.name)
        values[f.name] = mine if mine != getattr(defaults, f.name) else getattr(fallback, f.name)
    return type(preferred)(**values)


def _load_yaml(file_path: str) -> dict[str, Any] | None:
    """
    Load YAML configuration file.

    Returns:
        Parsed configuration dictionary, or None if the file is unreadable or invalid
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return None


def _load_json(file_path: str) -> dict[str, Any] | None:
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, json.JSONDecodeError):
        return None


def load_config_file(file_path: str, verbose: bool = False) -> Config | None:
    """
    Load configuration from a single file.

    Args:
        file_path: Path to a .yml/.yaml or .json configuration file
        verbose: Enable verbose logging

    Returns:
        Config object, or None if file cannot be loaded
    """
    if not os.path.exists(file_path):
        return None

    vlog(f"Loading config from: {file_path}", verbose)

    if file_path.endswith(".json"):
        data = _load_json(file_path)
    else:
        data = _load_yaml(file_path)

    if data is None:
        vlog(f"Invalid config file: {file_path}", verbose)
        return None

    try:
        config = Config.from_dict(data, source=file_path)
        vlog(f"Loaded config successfully: {file_path}", verbose)
        return config
    except (ValueError, TypeError) as e:
        vlog(f"Config validation failed for {file_path}: {e}", verbose)
        return None


def apply_env_overrides(config: Config) -> Config:
    """
    Apply MOTION_DOCTOR_* environment overrides on top of file configuration.

    Raises:
        ValueError: If an override has an invalid value
    """
    report = config.report
    probes = config.probes

    color = os.environ.get("MOTION_DOCTOR_COLOR", "").strip()
    if color:
        report = dataclasses.replace(report, color=color == "1")

    timeout = os.environ.get("MOTION_DOCTOR_TIMEOUT_SECONDS", "").strip()
    if timeout:
        try:
            probes = dataclasses.replace(probes, timeout_seconds=int(timeout))
        except ValueError as e:
            raise ValueError(f"Invalid MOTION_DOCTOR_TIMEOUT_SECONDS: {timeout!r}") from e

    return dataclasses.replace(config, report=report, probes=probes)


def load_config(
    custom_path: str | None = None,
    verbose: bool = False,
) -> Config:
    """
    Load and merge configuration from all sources.

    Configuration precedence (highest to lowest):
    1. Environment overrides (MOTION_DOCTOR_COLOR, MOTION_DOCTOR_TIMEOUT_SECONDS)
    2. Custom path (if provided)
    3. Project .motion-doctor.yml
    4. User ~/.config/motion-doctor/config.yml
    5. System /etc/motion-doctor/config.yml
    6. Default configuration

    Args:
        custom_path: Optional path to custom configuration file
        verbose: Enable verbose logging

    Returns:
        Merged Config object (never None, returns defaults if no config found)

    Raises:
        ValueError: If custom_path is provided but file cannot be loaded
    """
    configs: list[Config] = []

    if custom_path:
        config = load_config_file(custom_path, verbose)
        if config is None:
            raise ValueError(f"Could not load config from specified path: {custom_path}")
        configs.append(config)

    for location in CONFIG_LOCATIONS:
        config = load_config_file(location, verbose)
        if config is not None:
            configs.append(config)
            vlog(f"Found config at: {location}", verbose)

    if not configs:
        vlog("No config files found, using defaults", verbose)
        return apply_env_overrides(Config())

    merged = configs[0]
    for config in configs[1:]:
        merged = merged.merge_with(config)

    vlog(f"Merged {len(configs)} config files", verbose)
    return apply_env_overrides(merged)


def validate_config(config: Config) -> list[str]:
    """
    Return warnings for settings that are legal but probably unintended.
    """
    warnings = []

    if config.probes.timeout_seconds == 0:
        warnings.append("timeout_seconds is 0: a hung tool will stall the report")

    if not os.path.isabs(config.probes.rubymotion_data_path):
        warnings.append(
            f"rubymotion_data_path is relative ({config.probes.rubymotion_data_path}); "
            "it is resolved against the working directory"
        )

    if config.report.label_width + 2 >= config.report.columns:
        warnings.append("label_width leaves no room for values within columns")

    return warnings
