"""
Diagnostic logging for motion-doctor.

The report itself goes to stdout via motion_doctor.render. Diagnostics
go to stderr and, optionally, to a log file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "motion_doctor"

CONSOLE_FORMAT = "%(levelname_colored)s %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger: Optional[logging.Logger] = None


def _resolve_level(level: str, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.getLevelName(level.upper())


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
    propagate: bool = False,
) -> logging.Logger:
    """
    (Re)configure the motion_doctor logger.

    Probes log each command at DEBUG, so `-v` shows exactly what was run.

    Args:
        level: Console level name when neither verbose nor quiet is set
        log_file: Also write every record, DEBUG included, to this file
        verbose: Force DEBUG
        quiet: No console handler; only a log file, if any, receives records
        propagate: Pass records on to the root logger (pytest's caplog needs this)
    """
    global _logger

    effective_level = _resolve_level(level, verbose, quiet)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(effective_level)
    logger.handlers.clear()

    if not quiet:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(effective_level)
        console.setFormatter(ColoredFormatter(CONSOLE_FORMAT, use_colors=sys.stderr.isatty()))
        logger.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = propagate
    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Return the motion_doctor logger, configuring defaults on first use."""
    global _logger
    if _logger is None:
        _logger = setup_logging()
    return _logger


class ColoredFormatter(logging.Formatter):
    """Adds `levelname_colored` to each record, tinted for terminals."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "") if self.use_colors else ""
        record.levelname_colored = f"{color}{record.levelname}{self.RESET}" if color else record.levelname
        return super().format(record)
