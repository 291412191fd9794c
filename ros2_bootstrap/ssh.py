"""
SSH authentication probe for the code host.

Hosts such as GitHub refuse shell access and exit non-zero even when
the key is accepted, so readiness is decided from the greeting text.
"""

from __future__ import annotations

import logging
import re
import subprocess

from .errors import SSHNotReadyError

LOG = logging.getLogger(__name__)

_READY_PATTERN = re.compile(r"success|authenticated", re.IGNORECASE)


def ssh_greeting(target: str, timeout: float = 30.0) -> str:
    """
    Run a non-interactive ``ssh -T`` against target and return its output.

    stdout and stderr are merged because the greeting is printed on
    stderr by most hosts.
    """

    cmd = ["ssh", "-o", "BatchMode=yes", "-T", target]
    LOG.debug("Running ssh command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            check=False,
            text=True,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise SSHNotReadyError(f"ssh to {target} timed out after {timeout:g}s") from exc
    except OSError as exc:
        raise SSHNotReadyError(f"failed to execute ssh: {exc}") from exc

    LOG.debug("ssh exited with status %d", completed.returncode)
    return (completed.stdout or "").strip()


def is_ready_greeting(output: str) -> bool:
    return bool(_READY_PATTERN.search(output))


def check_ssh_ready(target: str, timeout: float = 30.0) -> None:
    """
    Confirm that a usable key is loaded for target.

    Raises SSHNotReadyError with the host's message otherwise.
    """

    LOG.info("-> Testing SSH authentication to %s", target)
    output = ssh_greeting(target, timeout=timeout)
    if is_ready_greeting(output):
        LOG.info("SSH authentication confirmed")
        return

    LOG.warning("SSH not confirmed, host replied: %s", output or "<no output>")
    raise SSHNotReadyError(
        f"SSH is not ready for {target}; add your public key to the host account and retry"
    )
