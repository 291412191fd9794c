"""
Git integration for ros2-bootstrap.

This module is responsible for interacting with the git CLI to probe
repository access and to clone the workspace repository.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional, Union

from .errors import GitError, RepoAccessError

LOG = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _run_git(
    args: list[str],
    cwd: Optional[PathLike] = None,
    capture: bool = True,
) -> subprocess.CompletedProcess[str]:
    """
    Run a git command and return the completed process.

    All git invocations go through this helper so that error handling
    and logging are centralized. Prompts are disabled so a missing
    credential fails instead of hanging. With capture=False git writes
    straight to the terminal, so clone progress stays visible.
    """

    cmd = ["git", *args]
    LOG.debug("Running git command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            check=False,
            text=True,
            capture_output=capture,
            stdin=subprocess.DEVNULL,
            env=_git_env(),
        )
    except OSError as exc:
        raise GitError(f"failed to execute git: {exc}") from exc

    if completed.returncode != 0:
        stderr = (completed.stderr or "").strip()
        LOG.debug("git stderr: %s", stderr)
        message = f"git command failed: {' '.join(cmd)}"
        if stderr:
            message = f"{message}: {stderr}"
        raise GitError(message)

    return completed


def _git_env() -> dict[str, str]:
    env = os.environ.copy()
    env.setdefault("GIT_TERMINAL_PROMPT", "0")
    return env


def check_repo_access(url: str, display_name: Optional[str] = None) -> None:
    """
    Confirm the repository at url is readable before cloning.

    Raises RepoAccessError when git cannot list its refs.
    """

    LOG.info("-> Checking access to repository %s", display_name or url)
    try:
        _run_git(["ls-remote", url])
    except GitError as exc:
        LOG.warning("Access refused, missing permissions or unauthorized key")
        raise RepoAccessError(
            f"access to {display_name or url} was refused over {url}; check your permissions"
        ) from exc
    LOG.info("Repository access confirmed")


def clone(url: str, dest: PathLike) -> None:
    """
    Clone url into dest.
    """

    LOG.info("-> Cloning %s into %s", url, dest)
    _run_git(["clone", url, str(dest)], capture=False)


def is_checkout(path: PathLike) -> bool:
    """
    Return True if path holds a git working tree.
    """

    return (Path(path) / ".git").is_dir()
