from ros2_bootstrap.errors import MissingToolError
from ros2_bootstrap.preflight import require_tools, required_tools


def test_required_tools_drops_ssh_when_probe_disabled():
    assert required_tools(ssh_check=True) == ["git", "ssh"]
    assert required_tools(ssh_check=False) == ["git"]


def test_require_tools_passes_when_everything_is_installed(monkeypatch):
    monkeypatch.setattr(
        "ros2_bootstrap.preflight.shutil.which",
        lambda name: f"/usr/bin/{name}",
    )

    require_tools(["git", "ssh"])


def test_require_tools_reports_every_missing_tool(monkeypatch):
    installed = {"git": "/usr/bin/git"}
    monkeypatch.setattr("ros2_bootstrap.preflight.shutil.which", installed.get)

    try:
        require_tools(["git", "ssh", "rsync"])
    except MissingToolError as exc:
        message = str(exc)
        assert "ssh" in message
        assert "rsync" in message
        assert "git," not in message
    else:
        raise AssertionError("expected MissingToolError to be raised")
