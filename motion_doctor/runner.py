"""
Synchronous external command execution with outcome classification.

A single invocation is authoritative for a run: there are no retries.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from .logging_config import get_logger

DEFAULT_TIMEOUT_SECONDS = 10


class CommandStatus(str, Enum):
    """How a command invocation ended."""
    SUCCESS = "success"          # ran, exit code 0
    FAILURE = "failure"          # ran, non-zero exit code
    NOT_FOUND = "not_found"      # executable could not be located
    SYS_FAILURE = "sys_failure"  # OS refused to launch it
    TIMED_OUT = "timed_out"      # killed after the timeout expired


@dataclass(frozen=True)
class CommandResult:
    """
    Captured result of one command invocation.

    Attributes:
        args: The command line that was run
        status: Classified outcome
        stdout: Captured standard output ("" if the command never ran)
        stderr: Captured standard error ("" if the command never ran)
        exit_code: Process exit code, or None if it never completed
        error: OS error message for NOT_FOUND/SYS_FAILURE/TIMED_OUT
    """
    args: tuple[str, ...]
    status: CommandStatus
    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = None
    error: str = ""

    @property
    def command(self) -> str:
        return " ".join(self.args)

    @property
    def succeeded(self) -> bool:
        return self.status is CommandStatus.SUCCESS

    @property
    def executed(self) -> bool:
        """True if the process was launched and ran to completion."""
        return self.status in (CommandStatus.SUCCESS, CommandStatus.FAILURE)


Runner = Callable[[Sequence[str]], CommandResult]


def run_command(args: Sequence[str], timeout: float | None = None) -> CommandResult:
    """Run a command and capture stdout, stderr and exit code.

    Args:
        args: Command and arguments
        timeout: Seconds before the process is killed (None waits forever)

    Returns:
        CommandResult describing the outcome. Launch errors are returned,
        never raised.
    """
    argv = tuple(args)
    logger = get_logger()
    logger.debug("running: %s", " ".join(argv))

    try:
        proc = subprocess.run(
            list(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
            env={**os.environ, "TERM": "dumb"},
        )
    except FileNotFoundError as e:
        logger.debug("not found: %s (%s)", argv[0], e)
        return CommandResult(argv, CommandStatus.NOT_FOUND, error=str(e))
    except subprocess.TimeoutExpired:
        message = f"`{' '.join(argv)}` timed out after {timeout:g} seconds"
        logger.warning(message)
        return CommandResult(argv, CommandStatus.TIMED_OUT, error=message)
    except OSError as e:
        message = e.strerror or str(e)
        logger.warning("could not launch %s: %s", argv[0], message)
        return CommandResult(argv, CommandStatus.SYS_FAILURE, error=message)

    status = CommandStatus.SUCCESS if proc.returncode == 0 else CommandStatus.FAILURE
    logger.debug("%s exited with %d", argv[0], proc.returncode)
    return CommandResult(
        argv,
        status,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
        exit_code=proc.returncode,
    )


def make_runner(timeout: float | None = DEFAULT_TIMEOUT_SECONDS) -> Runner:
    """Bind a timeout to run_command. A timeout of 0 or None disables it."""
    effective = timeout if timeout else None

    def runner(args: Sequence[str]) -> CommandResult:
        return run_command(args, timeout=effective)

    return runner
