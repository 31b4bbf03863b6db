"""
Top-level probe → evaluate → render sequencing.

Probes run one after another on the calling thread. Every run starts from
scratch; a failed probe only affects its own finding group.
"""

from __future__ import annotations

import os
import pprint
import sys
from dataclasses import dataclass
from typing import Mapping, TextIO

from . import evaluate, probes
from .config import Config
from .environment import (
    evaluate_osx_version,
    evaluate_working_directory,
    probe_osx,
    probe_working_directory,
)
from .evaluate import Section
from .logging_config import get_logger
from .probes import ProbeOutcome
from .render import print_report_header, print_section_header, render_sections
from .runner import Runner, make_runner

REPORT_TITLE = "RubyMotion Doctor"


@dataclass(frozen=True)
class EnvironmentData:
    osx: ProbeOutcome
    working_directory: str


@dataclass(frozen=True)
class InstallationData:
    rubymotion: ProbeOutcome
    sdks: tuple[tuple[str, ProbeOutcome], ...]  # (framework name, outcome)
    rbenv: ProbeOutcome
    ruby_versions: ProbeOutcome
    xcode_select: ProbeOutcome
    xcode_path: ProbeOutcome
    xcode: ProbeOutcome
    javac: ProbeOutcome
    java_home: ProbeOutcome


def collect_environment(runner: Runner, working_directory: str | None = None) -> EnvironmentData:
    return EnvironmentData(
        osx=probe_osx(runner),
        working_directory=working_directory or probe_working_directory(),
    )


def collect_installation(
    runner: Runner,
    config: Config,
    environ: Mapping[str, str] | None = None,
) -> InstallationData:
    rubymotion = probes.probe_rubymotion(runner)
    data_path = config.probes.rubymotion_data_path
    sdks = tuple(
        (name, probes.probe_rubymotion_sdks(subdir, data_path))
        for name, subdir in probes.RUBYMOTION_FRAMEWORKS
    )

    rbenv = probes.probe_rbenv(runner)
    ruby_versions = probes.probe_rbenv_ruby_versions(runner, rbenv)

    xcode_select = probes.probe_xcode_select(runner)
    xcode_path = probes.probe_xcode_path(runner, xcode_select)
    xcode = probes.probe_xcode(runner, xcode_path)

    return InstallationData(
        rubymotion=rubymotion,
        sdks=sdks,
        rbenv=rbenv,
        ruby_versions=ruby_versions,
        xcode_select=xcode_select,
        xcode_path=xcode_path,
        xcode=xcode,
        javac=probes.probe_javac(runner),
        java_home=probes.probe_java_home(environ, config.probes.java_home_variable),
    )


def environment_section(data: EnvironmentData, config: Config) -> Section:
    return Section("Environment", (
        evaluate_osx_version(data.osx, config.expectations.minimum_osx_version),
        evaluate_working_directory(data.working_directory),
    ))


def installation_section(data: InstallationData, config: Config) -> Section:
    groups = [evaluate.evaluate_rubymotion_version(data.rubymotion)]
    groups.extend(
        evaluate.evaluate_rubymotion_sdks(outcome, name) for name, outcome in data.sdks
    )
    groups.extend([
        evaluate.evaluate_rbenv_version(data.rbenv),
        evaluate.evaluate_rbenv_ruby_versions(data.ruby_versions),
        evaluate.evaluate_xcode_version(data.xcode, data.rubymotion),
        evaluate.evaluate_xcode_select_version(data.xcode_select, config.expectations.xcode_select_build),
        evaluate.evaluate_xcode_path(data.xcode_path),
        evaluate.evaluate_java_version(data.javac),
        evaluate.evaluate_java_home(data.java_home),
    ])
    return Section("Installation Tests", tuple(groups))


def run_doctor(
    config: Config | None = None,
    runner: Runner | None = None,
    environ: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
    dump: bool = False,
    working_directory: str | None = None,
) -> list[Section]:
    """Probe, evaluate and print the full report.

    Args:
        config: Loaded configuration (defaults if None)
        runner: Command runner (a timeout-bound run_command if None)
        environ: Environment mapping for variable probes (os.environ if None)
        stream: Output stream (sys.stdout if None)
        dump: Also print the raw collected probe data
        working_directory: Override for the working-directory probe

    Returns:
        The rendered sections, in report order
    """
    config = config or Config()
    runner = runner or make_runner(config.probes.timeout_seconds)
    environ = os.environ if environ is None else environ
    out = stream or sys.stdout
    logger = get_logger()

    report = config.report
    print_report_header(REPORT_TITLE, report.columns, out)

    logger.debug("collecting environment data")
    env_data = collect_environment(runner, working_directory)
    logger.debug("collecting installation data")
    install_data = collect_installation(runner, config, environ)

    sections = [
        environment_section(env_data, config),
        installation_section(install_data, config),
    ]
    render_sections(sections, report.label_width, report.columns, report.color, out)

    if dump:
        print_section_header("Guru Meditation", report.columns, out)
        pprint.pprint(env_data, stream=out)
        pprint.pprint(install_data, stream=out)

    return sections
