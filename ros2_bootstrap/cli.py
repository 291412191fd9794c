"""
Command-line interface for ros2-bootstrap.

This module is responsible for argument parsing and delegating to the
bootstrap sequence.
"""

from __future__ import annotations

import argparse
import os
import sys
from argparse import BooleanOptionalAction
from pathlib import Path
from typing import List, Optional

from .bootstrap import run_bootstrap
from .config import (
    DEFAULT_HOST,
    DEFAULT_REPO_PATH,
    DEFAULT_RMW_IMPLEMENTATION,
    DEFAULT_ROS_DISTRO,
    DEFAULT_SSH_USER,
    ON_EXISTING_CHOICES,
    Config,
)
from .errors import BootstrapError
from .logging_utils import configure_logging


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ros2-bootstrap",
        description=(
            "Check SSH access to the code host, clone the workspace repository "
            "into ros2_ws/src and optionally update your shell profile."
        ),
    )

    parser.add_argument(
        "--workdir",
        type=Path,
        default=Path.cwd(),
        help="Directory that holds ros2_ws (default: current directory).",
    )
    parser.add_argument(
        "--repo",
        dest="repo_path",
        default=os.environ.get("ROS2_BOOTSTRAP_REPO", DEFAULT_REPO_PATH),
        help="Repository as owner/name (default: %(default)s).",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("ROS2_BOOTSTRAP_HOST", DEFAULT_HOST),
        help="Code host to authenticate against (default: %(default)s).",
    )
    parser.add_argument(
        "--ssh-user",
        default=DEFAULT_SSH_USER,
        help="SSH user on the code host (default: %(default)s).",
    )
    parser.add_argument(
        "--repo-url",
        help="Clone from this URL instead of the SSH URL built from --ssh-user, --host and --repo.",
    )
    parser.add_argument(
        "--ssh-check",
        action=BooleanOptionalAction,
        default=True,
        help="Probe SSH authentication before touching the repository.",
    )
    parser.add_argument(
        "--ssh-timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for the SSH probe (default: %(default)s).",
    )
    parser.add_argument(
        "--on-existing",
        choices=ON_EXISTING_CHOICES,
        default="ask",
        help="What to do when the repository is already cloned (default: ask).",
    )
    parser.add_argument(
        "--update-profile",
        action=BooleanOptionalAction,
        default=False,
        help="Append ROS 2 and workspace lines to the shell profile if missing.",
    )
    parser.add_argument(
        "--profile",
        dest="profile_path",
        type=Path,
        default=Path.home() / ".bashrc",
        help="Shell profile to update (default: ~/.bashrc).",
    )
    parser.add_argument(
        "--ros-distro",
        default=os.environ.get("ROS_DISTRO") or DEFAULT_ROS_DISTRO,
        help="ROS 2 distribution under /opt/ros (default: %(default)s).",
    )
    parser.add_argument(
        "--rmw",
        dest="rmw_implementation",
        default=DEFAULT_RMW_IMPLEMENTATION,
        help="RMW_IMPLEMENTATION to export (default: %(default)s).",
    )
    parser.add_argument(
        "--no-banner",
        dest="show_banner",
        action="store_false",
        help="Do not print the start-up banner.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors.",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    return Config(
        workdir=args.workdir,
        repo_path=args.repo_path,
        host=args.host,
        ssh_user=args.ssh_user,
        repo_url=args.repo_url,
        ssh_check=args.ssh_check,
        on_existing=args.on_existing,
        update_profile=args.update_profile,
        profile_path=args.profile_path,
        ros_distro=args.ros_distro,
        rmw_implementation=args.rmw_implementation,
        ssh_timeout=args.ssh_timeout,
        show_banner=args.show_banner,
        verbosity=-1 if args.quiet else args.verbose,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    config = config_from_args(args)

    configure_logging(verbosity=config.verbosity)

    try:
        run_bootstrap(config)
    except KeyboardInterrupt:
        return 130
    except BootstrapError as exc:
        print(f"ros2-bootstrap: error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
