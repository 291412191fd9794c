import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest


pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def _run_git(args, cwd: Path) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        text=True,
        capture_output=True,
        check=True,
    )


def _make_upstream(root: Path) -> Path:
    upstream = root / "upstream"
    upstream.mkdir()
    _run_git(["init"], cwd=upstream)
    _run_git(["config", "user.name", "ros2-bootstrap"], cwd=upstream)
    _run_git(["config", "user.email", "ros2-bootstrap@example.com"], cwd=upstream)
    (upstream / "package.xml").write_text("<package format=\"3\"><name>robot_stack</name></package>\n")
    _run_git(["add", "package.xml"], cwd=upstream)
    _run_git(["commit", "-m", "initial"], cwd=upstream)
    return upstream


def _run_cli(args, home: Path) -> subprocess.CompletedProcess[str]:
    project_root = Path(__file__).resolve().parents[1]
    env = os.environ.copy()
    env["PYTHONPATH"] = str(project_root)
    env["HOME"] = str(home)

    return subprocess.run(
        [sys.executable, "-m", "ros2_bootstrap.cli", *args],
        env=env,
        text=True,
        capture_output=True,
        stdin=subprocess.DEVNULL,
        check=True,
    )


def test_cli_bootstraps_workspace_from_local_repo(tmp_path):
    """
    End-to-end run against a real git repository on disk.

    The first run clones into ros2_ws/src and writes the profile; the
    second keeps the checkout and leaves the profile alone; the third
    overwrites the checkout.
    """

    upstream = _make_upstream(tmp_path)
    workdir = tmp_path / "dev"
    workdir.mkdir()
    profile = tmp_path / ".bashrc"

    common = [
        "--workdir", str(workdir),
        "--repo", "demo/robot_stack",
        "--repo-url", str(upstream),
        "--no-ssh-check",
        "--no-banner",
        "--update-profile",
        "--profile", str(profile),
    ]

    _run_cli(common, home=tmp_path)

    checkout = workdir.resolve() / "ros2_ws" / "src" / "robot_stack"
    assert (checkout / ".git").is_dir()
    assert (checkout / "package.xml").exists()

    setup_script = workdir.resolve() / "ros2_ws" / "install" / "setup.bash"
    assert profile.read_text().splitlines() == [
        "source /opt/ros/humble/setup.bash",
        "export RMW_IMPLEMENTATION=rmw_cyclonedds_cpp",
        f"source {setup_script}",
    ]
    first_profile = profile.read_text()

    (checkout / "scratch.txt").write_text("local work\n")
    _run_cli([*common, "--on-existing", "skip"], home=tmp_path)

    assert (checkout / "scratch.txt").exists()
    assert profile.read_text() == first_profile
    assert len(list(tmp_path.glob(".bashrc.bak.*"))) == 1

    _run_cli([*common, "--on-existing", "overwrite"], home=tmp_path)

    assert not (checkout / "scratch.txt").exists()
    assert (checkout / "package.xml").exists()


def test_cli_fails_for_unreadable_repository(tmp_path):
    project_root = Path(__file__).resolve().parents[1]
    env = os.environ.copy()
    env["PYTHONPATH"] = str(project_root)

    completed = subprocess.run(
        [
            sys.executable, "-m", "ros2_bootstrap.cli",
            "--workdir", str(tmp_path),
            "--repo-url", str(tmp_path / "does-not-exist"),
            "--no-ssh-check",
            "--no-banner",
        ],
        env=env,
        text=True,
        capture_output=True,
        stdin=subprocess.DEVNULL,
    )

    assert completed.returncode == 1
    assert "ros2-bootstrap: error:" in completed.stderr
    assert not (tmp_path / "ros2_ws" / "src" / "CDFR26_ROS2").exists()
