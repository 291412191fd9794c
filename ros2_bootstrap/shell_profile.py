"""
Idempotent edits of the user's shell startup file.

The profile is treated as a bag of lines: a line counts as present when
any existing line is equivalent to it, wherever it sits. Missing lines
are appended after a timestamped backup of the file, so repeated runs
converge to the same content.
"""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Sequence

from .errors import ProfileError

LOG = logging.getLogger(__name__)

_SOURCE = r"(?:source|\.)"
_SOURCE_LINE = re.compile(rf"^\s*{_SOURCE}\s+(?P<arg>.+?)\s*$")
_HOME_PREFIXES = ("~/", "$HOME/", "${HOME}/")
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


@dataclass(frozen=True)
class ProfileLine:
    """
    A line the profile must contain.

    pattern recognises equivalent spellings of the same line. When
    sourced_path is set, a ``source`` line naming that file through
    quotes, ``~`` or ``$HOME`` also counts.
    """

    text: str
    pattern: Pattern[str]
    sourced_path: Optional[str] = None


def source_line(path: str, match_aliases: bool = False) -> ProfileLine:
    pattern = re.compile(rf"^\s*{_SOURCE}\s+{re.escape(path)}\s*$")
    return ProfileLine(
        text=f"source {path}",
        pattern=pattern,
        sourced_path=path if match_aliases else None,
    )


def export_line(name: str, value: str) -> ProfileLine:
    pattern = re.compile(rf"^\s*export\s+{re.escape(name)}={re.escape(value)}\s*$")
    return ProfileLine(text=f"export {name}={value}", pattern=pattern)


def ros_profile_lines(distro: str, rmw_implementation: str, setup_script: Path) -> List[ProfileLine]:
    """
    Lines that source ROS 2, select the RMW and overlay the workspace.
    """

    return [
        source_line(f"/opt/ros/{distro}/setup.bash"),
        export_line("RMW_IMPLEMENTATION", rmw_implementation),
        source_line(str(setup_script), match_aliases=True),
    ]


def sourced_path(line: str, home: str) -> Optional[str]:
    """
    Return the file a ``source`` line loads, with quotes removed and a
    leading ``~/``, ``$HOME/`` or ``${HOME}/`` expanded to home.

    Lines carrying a comment are ignored.
    """

    match = _SOURCE_LINE.match(line)
    if match is None:
        return None
    arg = match.group("arg")
    if "#" in arg:
        return None

    if len(arg) >= 2 and arg[0] == arg[-1] and arg[0] in "\"'":
        arg = arg[1:-1]

    for prefix in _HOME_PREFIXES:
        if arg.startswith(prefix):
            arg = f"{home.rstrip('/')}/{arg[len(prefix):]}"
            break
    return arg


def is_present(line: ProfileLine, existing: Sequence[str], home: str) -> bool:
    if any(line.pattern.match(candidate) for candidate in existing):
        return True
    if line.sourced_path is None:
        return False
    return any(sourced_path(candidate, home) == line.sourced_path for candidate in existing)


def backup_profile(path: Path, timestamp: Optional[str] = None) -> Path:
    """
    Copy path to ``<path>.bak.<timestamp>``, preserving metadata.
    """

    stamp = timestamp or datetime.now().strftime(BACKUP_TIMESTAMP_FORMAT)
    backup = path.with_name(f"{path.name}.bak.{stamp}")
    try:
        shutil.copy2(path, backup)
    except OSError as exc:
        raise ProfileError(f"failed to back up {path}: {exc}") from exc
    LOG.debug("Backed up %s to %s", path, backup)
    return backup


def ensure_profile_lines(
    path: Path,
    lines: Iterable[ProfileLine],
    home: Optional[str] = None,
    timestamp: Optional[str] = None,
) -> List[str]:
    """
    Append every line of lines that the profile at path lacks.

    The file is created when missing. A backup is taken only when an
    edit is about to happen. Bytes that are not valid UTF-8 are
    carried through untouched. Returns the text of the appended lines.
    """

    home = home if home is not None else str(Path.home())
    path = Path(path)

    try:
        if not path.exists():
            LOG.info("-> Creating %s", path)
            path.touch()
        content = path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise ProfileError(f"failed to read {path}: {exc}") from exc

    existing = content.splitlines()
    missing: List[ProfileLine] = []
    for line in lines:
        if is_present(line, existing, home) or any(line.text == m.text for m in missing):
            LOG.debug("Already present in %s: %s", path, line.text)
            continue
        missing.append(line)

    if not missing:
        LOG.info("%s already up to date", path)
        return []

    backup_profile(path, timestamp=timestamp)

    chunk = "\n" if content and not content.endswith("\n") else ""
    chunk += "".join(f"{line.text}\n" for line in missing)
    try:
        with path.open("a", encoding="utf-8", errors="surrogateescape") as handle:
            handle.write(chunk)
    except OSError as exc:
        raise ProfileError(f"failed to update {path}: {exc}") from exc

    for line in missing:
        LOG.info("-> Added: %s", line.text)
    return [line.text for line in missing]
