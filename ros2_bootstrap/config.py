"""
Configuration model for ros2-bootstrap.

The CLI constructs a Config instance and passes it down into the
bootstrap sequence so behavior can be adjusted without relying on
global state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_REPO_PATH = "FIPATECH/CDFR26_ROS2"
DEFAULT_HOST = "github.com"
DEFAULT_SSH_USER = "git"
DEFAULT_ROS_DISTRO = "humble"
DEFAULT_RMW_IMPLEMENTATION = "rmw_cyclonedds_cpp"
WORKSPACE_DIRNAME = "ros2_ws"

ON_EXISTING_CHOICES = ("ask", "skip", "overwrite")


def _default_profile_path() -> Path:
    return Path.home() / ".bashrc"


@dataclass
class Config:
    """
    Top-level configuration for a bootstrap run.

    workdir is the directory that will hold ``ros2_ws``; it defaults to
    the current directory. repo_url, when set, replaces the SSH URL
    derived from ssh_user, host and repo_path.
    """

    workdir: Path = field(default_factory=Path.cwd)
    repo_path: str = DEFAULT_REPO_PATH
    host: str = DEFAULT_HOST
    ssh_user: str = DEFAULT_SSH_USER
    repo_url: Optional[str] = None
    ssh_check: bool = True
    on_existing: str = "ask"
    update_profile: bool = False
    profile_path: Path = field(default_factory=_default_profile_path)
    ros_distro: str = DEFAULT_ROS_DISTRO
    rmw_implementation: str = DEFAULT_RMW_IMPLEMENTATION
    ssh_timeout: float = 30.0
    show_banner: bool = True
    verbosity: int = 0

    def __post_init__(self) -> None:
        if self.on_existing not in ON_EXISTING_CHOICES:
            raise ValueError(
                f"on_existing must be one of {', '.join(ON_EXISTING_CHOICES)}, "
                f"got {self.on_existing!r}"
            )
        self.workdir = Path(self.workdir)
        self.profile_path = Path(self.profile_path).expanduser()

    @property
    def clone_url(self) -> str:
        if self.repo_url:
            return self.repo_url
        path = self.repo_path.rstrip("/")
        if path.endswith(".git"):
            path = path[: -len(".git")]
        return f"{self.ssh_target}:{path}.git"

    @property
    def ssh_target(self) -> str:
        return f"{self.ssh_user}@{self.host}"

    @property
    def repo_name(self) -> str:
        name = self.repo_path.rstrip("/").rsplit("/", 1)[-1]
        if name.endswith(".git"):
            name = name[: -len(".git")]
        return name

    @property
    def workspace_dir(self) -> Path:
        # Physical path, symlinks resolved.
        return self.workdir.resolve() / WORKSPACE_DIRNAME

    @property
    def src_dir(self) -> Path:
        return self.workspace_dir / "src"

    @property
    def repo_dir(self) -> Path:
        return self.src_dir / self.repo_name

    @property
    def workspace_setup_script(self) -> Path:
        return self.workspace_dir / "install" / "setup.bash"
