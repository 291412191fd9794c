"""
Prerequisite checks for ros2-bootstrap.

These checks run before anything touches the network or the
filesystem so a missing tool fails fast with an actionable error.
"""

from __future__ import annotations

import logging
import shutil
from typing import Iterable, List

from .errors import MissingToolError

LOG = logging.getLogger(__name__)

REQUIRED_TOOLS = ("git", "ssh")


def required_tools(ssh_check: bool = True) -> List[str]:
    """
    Return the executables needed for a run.

    ssh is only needed when the SSH authentication probe is enabled;
    git itself may still use ssh through the clone URL.
    """

    if ssh_check:
        return list(REQUIRED_TOOLS)
    return [tool for tool in REQUIRED_TOOLS if tool != "ssh"]


def require_tools(names: Iterable[str]) -> None:
    """
    Ensure every named executable is on PATH.

    All missing tools are reported at once rather than one per run.
    """

    missing: List[str] = []
    for name in names:
        location = shutil.which(name)
        if location is None:
            missing.append(name)
        else:
            LOG.debug("Found %s at %s", name, location)

    if missing:
        raise MissingToolError(f"missing required command(s), please install: {', '.join(missing)}")
