#!/usr/bin/env python3
"""
RubyMotion Doctor - toolchain health report.

Probes RubyMotion, rbenv, Xcode and the JDK, checks the versions against
known-good pairings and prints a severity-colored report. Read-only.

Usage:
    doctor.py                     # Print the report
    doctor.py --dump              # Also print the raw probe data
    doctor.py --config FILE       # Use a specific config file

Re-running on file change is left to an external watcher, e.g.:
    fswatch ./doctor.py | xargs -n1 -I{} python3 ./doctor.py
"""

import argparse
import dataclasses
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from motion_doctor import __version__
from motion_doctor.config import load_config, validate_config
from motion_doctor.logging_config import setup_logging
from motion_doctor.pipeline import run_doctor


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="motion-doctor",
        description="Check a RubyMotion development toolchain.",
    )
    parser.add_argument("--config", metavar="PATH", help="configuration file (YAML or JSON)")
    parser.add_argument("--no-color", action="store_true", help="disable colored output")
    parser.add_argument("--dump", action="store_true", help="print the raw probe data after the report")
    parser.add_argument("-v", "--verbose", action="store_true", help="log probe commands to stderr")
    parser.add_argument("--log-file", metavar="FILE", help="also write debug logs to FILE")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        config = load_config(args.config, verbose=args.verbose)
    except ValueError as e:
        print(f"motion-doctor: {e}", file=sys.stderr)
        return 2

    for warning in validate_config(config):
        logger.warning(warning)

    if args.no_color:
        config = dataclasses.replace(config, report=dataclasses.replace(config.report, color=False))

    run_doctor(config=config, dump=args.dump)
    return 0


if __name__ == "__main__":
    sys.exit(main())
