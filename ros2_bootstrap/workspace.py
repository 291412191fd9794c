"""
Workspace layout and the clone-or-keep decision.

When the repository is already checked out the user is asked once
whether to overwrite it. Without an interactive terminal the existing
checkout is always kept.
"""

from __future__ import annotations

import logging
import shutil
import sys
from enum import Enum
from typing import Optional, TextIO

from . import git_adapter
from .config import Config
from .errors import WorkspaceError

LOG = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"
PROMPT = "Choose: [o] overwrite, [s] skip (default: skip)? "


class ExistingRepoChoice(str, Enum):
    SKIP = "skip"
    OVERWRITE = "overwrite"


class CloneOutcome(str, Enum):
    CLONED = "cloned"
    RECLONED = "recloned"
    KEPT = "kept"


def ensure_src_dir(config: Config) -> None:
    """Create ``ros2_ws/src`` under the work directory if it is missing."""

    src_dir = config.src_dir
    if src_dir.is_dir():
        return
    LOG.info("-> Creating directories %s", src_dir)
    try:
        src_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WorkspaceError(f"cannot create {src_dir}: {exc}") from exc


def _open_tty() -> Optional[TextIO]:
    try:
        return open(TTY_PATH, "r", encoding="utf-8")
    except OSError:
        return None


def parse_choice(answer: str) -> ExistingRepoChoice:
    """
    Interpret a prompt answer.

    Whitespace anywhere is ignored; only ``o`` or ``O`` selects
    overwrite, everything else keeps the checkout.
    """

    cleaned = "".join(answer.split())
    if cleaned in ("o", "O"):
        return ExistingRepoChoice.OVERWRITE
    return ExistingRepoChoice.SKIP


def prompt_existing_repo_choice(tty: Optional[TextIO] = None) -> ExistingRepoChoice:
    """
    Ask whether to overwrite an existing checkout.

    The question goes to stderr and the answer is read from the
    controlling terminal, so the prompt still works when stdin or stdout
    are redirected. tty may be injected; when omitted ``/dev/tty`` is
    opened and closed here.
    """

    owns_tty = tty is None
    if tty is None:
        tty = _open_tty()

    if tty is None:
        LOG.warning(
            "Non-interactive terminal detected and repository already present; "
            "keeping it and moving on"
        )
        return ExistingRepoChoice.SKIP

    try:
        LOG.warning("The repository is already present in this directory")
        sys.stderr.write(PROMPT)
        sys.stderr.flush()
        answer = tty.readline()
    except OSError:
        answer = ""
    finally:
        if owns_tty:
            tty.close()

    return parse_choice(answer)


def resolve_choice(config: Config, tty: Optional[TextIO] = None) -> ExistingRepoChoice:
    if config.on_existing == "skip":
        return ExistingRepoChoice.SKIP
    if config.on_existing == "overwrite":
        return ExistingRepoChoice.OVERWRITE
    return prompt_existing_repo_choice(tty)


def clone_or_decide(config: Config, tty: Optional[TextIO] = None) -> CloneOutcome:
    """
    Clone the repository, or apply the overwrite/skip policy when a
    checkout already exists at the destination.
    """

    url = config.clone_url
    dest = config.repo_dir

    if not git_adapter.is_checkout(dest):
        git_adapter.clone(url, dest)
        return CloneOutcome.CLONED

    choice = resolve_choice(config, tty)
    LOG.info("User choice: %s", choice.value)

    if choice is ExistingRepoChoice.OVERWRITE:
        LOG.warning("-> Removing %s before cloning again", dest)
        try:
            shutil.rmtree(dest)
        except OSError as exc:
            raise WorkspaceError(f"cannot remove {dest}: {exc}") from exc
        git_adapter.clone(url, dest)
        return CloneOutcome.RECLONED

    LOG.info("-> Existing repository kept, no changes made")
    return CloneOutcome.KEPT
