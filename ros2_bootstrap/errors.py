"""
Custom exception types used across ros2-bootstrap.

Defining explicit error classes makes it easier for the CLI to
distinguish between user-facing failures and unexpected bugs.
"""

from __future__ import annotations


class BootstrapError(Exception):
    """Base class for all ros2-bootstrap specific errors."""


class MissingToolError(BootstrapError):
    """Raised when a required executable is not on PATH."""


class GitError(BootstrapError):
    """Raised when git operations fail."""


class SSHNotReadyError(BootstrapError):
    """Raised when SSH authentication against the code host fails."""


class RepoAccessError(BootstrapError):
    """Raised when the repository cannot be read with the current key."""


class ProfileError(BootstrapError):
    """Raised when the shell profile cannot be read, backed up or edited."""


class WorkspaceError(BootstrapError):
    """Raised when the workspace directories cannot be created or replaced."""
