"""
High-level orchestration for ros2-bootstrap.

The bootstrap sequence is responsible for:
  - checking the required tools,
  - creating the workspace source directory,
  - confirming SSH authentication and repository access,
  - cloning the repository or keeping an existing checkout, and
  - optionally updating the user's shell profile.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, TextIO

from . import git_adapter
from .config import Config
from .preflight import require_tools, required_tools
from .shell_profile import ensure_profile_lines, ros_profile_lines
from .ssh import check_ssh_ready
from .workspace import CloneOutcome, clone_or_decide, ensure_src_dir

LOG = logging.getLogger(__name__)

BANNER = r"""

    ░░░░░░░ ░░ ░░░░░░   ░░░░░  ░░░░░░░░ ░░░░░░░  ░░░░░░ ░░   ░░
    ▒▒      ▒▒ ▒▒   ▒▒ ▒▒   ▒▒    ▒▒    ▒▒      ▒▒      ▒▒   ▒▒
    ▒▒▒▒▒   ▒▒ ▒▒▒▒▒▒  ▒▒▒▒▒▒▒    ▒▒    ▒▒▒▒▒   ▒▒      ▒▒▒▒▒▒▒
    ▓▓      ▓▓ ▓▓      ▓▓   ▓▓    ▓▓    ▓▓      ▓▓      ▓▓   ▓▓
    ██      ██ ██      ██   ██    ██    ███████  ██████ ██   ██     {title}
"""


@dataclass
class BootstrapResult:
    repo_dir: Path
    outcome: CloneOutcome
    profile_lines_added: List[str] = field(default_factory=list)


def print_banner(title: str, stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    stream.write(BANNER.format(title=title))
    stream.write("\n")
    stream.flush()


def update_shell_profile(config: Config) -> List[str]:
    """
    Make the configured shell profile source ROS 2 and the workspace.
    """

    LOG.info("-> Updating %s", config.profile_path)
    lines = ros_profile_lines(
        config.ros_distro,
        config.rmw_implementation,
        config.workspace_setup_script,
    )
    return ensure_profile_lines(config.profile_path, lines)


def run_bootstrap(config: Config, tty: Optional[TextIO] = None) -> BootstrapResult:
    """
    Run the whole bootstrap sequence and return what it did.

    Any failing step raises a BootstrapError subclass and stops the
    sequence; nothing after it runs.
    """

    if config.show_banner:
        print_banner(f"{config.repo_name} setup script")
    LOG.info("Starting %s setup", config.repo_name)

    require_tools(required_tools(ssh_check=config.ssh_check))

    ensure_src_dir(config)

    if config.ssh_check:
        check_ssh_ready(config.ssh_target, timeout=config.ssh_timeout)
    else:
        LOG.debug("SSH check disabled")

    git_adapter.check_repo_access(config.clone_url, display_name=config.repo_path)

    outcome = clone_or_decide(config, tty=tty)

    added: List[str] = []
    if config.update_profile:
        added = update_shell_profile(config)

    LOG.info("%s installed successfully at %s", config.repo_name, config.repo_dir)
    return BootstrapResult(repo_dir=config.repo_dir, outcome=outcome, profile_lines_added=added)
