"""
Common utilities shared across motion_doctor modules.
"""

from __future__ import annotations

import os

from .logging_config import get_logger


def env_flag(name: str, default: bool = True) -> bool:
    """
    Read a boolean "1"/"0" flag from the environment.

    Args:
        name: Environment variable name
        default: Value used when the variable is unset or empty

    Returns:
        True if the variable is "1", False if it is "0", otherwise default.
    """
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    return value == "1"


def vlog(msg: str, verbose: bool = False) -> None:
    """
    Log a message when verbose mode or MOTION_DOCTOR_DEBUG=1 is on.

    Args:
        msg: Message to log
        verbose: Whether verbose mode is enabled
    """
    if verbose or os.environ.get("MOTION_DOCTOR_DEBUG", "0") == "1":
        get_logger().info(msg)
