"""Path expansion, inspection, and executable lookup.

User-facing paths are interpreted relative to the home directory:
``~/x`` and bare relative paths both land under ``$HOME``; absolute paths
are used as-is.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from interop.domain.errors import ExecutableNotFoundError, ExecutableNotPermittedError


def expand_path(raw: str, *, home: Path | None = None) -> Path:
    """Expand a configured path string into an absolute path."""
    base = home or Path.home()
    if raw == "~":
        return base
    if raw.startswith("~/"):
        return base / raw[2:]
    p = Path(raw)
    if p.is_absolute():
        return p
    return base / p


def is_inside(path: Path, parent: Path) -> bool:
    """True if *path* is *parent* or lives beneath it (symlinks resolved)."""
    try:
        path.resolve().relative_to(parent.resolve())
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class PathInfo:
    """Result of inspecting a configured path."""

    raw: str
    path: Path
    exists: bool
    is_dir: bool
    in_home: bool


def inspect_path(raw: str, *, home: Path | None = None) -> PathInfo:
    base = home or Path.home()
    path = expand_path(raw, home=base)
    return PathInfo(
        raw=raw,
        path=path,
        exists=path.exists(),
        is_dir=path.is_dir(),
        in_home=is_inside(path, base),
    )


def is_user_executable(path: Path) -> bool:
    return bool(path.stat().st_mode & stat.S_IXUSR)


def path_dirs() -> list[Path]:
    """Directories listed in ``$PATH``, in order."""
    raw = os.environ.get("PATH", "")
    return [Path(entry) for entry in raw.split(os.pathsep) if entry]


def find_executable(
    name: str, search_dirs: Iterable[Path] = (), *, cwd: Path | None = None
) -> Path:
    """Locate *name* in *search_dirs*, then ``$PATH``.

    A name containing a path separator is not searched: ``~/x`` expands to
    the home directory, absolute paths are used as-is, and other relative
    paths resolve against *cwd* (default: the current directory).  The
    first file carrying the user execute bit wins.

    Raises:
        ExecutableNotPermittedError: Matches exist but none is executable.
        ExecutableNotFoundError: No directory contains *name*.
    """
    candidates: list[Path]
    if os.sep in name:
        path = Path(name).expanduser()
        candidates = [path if path.is_absolute() else (cwd or Path.cwd()) / path]
    else:
        candidates = [d / name for d in [*search_dirs, *path_dirs()]]

    blocked: Path | None = None
    for candidate in candidates:
        if not candidate.is_file():
            continue
        if is_user_executable(candidate):
            return candidate
        if blocked is None:
            blocked = candidate

    if blocked is not None:
        msg = f"'{blocked}' is not executable (try: chmod +x {blocked})"
        raise ExecutableNotPermittedError(msg, executable=name, path=str(blocked))
    msg = f"executable '{name}' not found in search paths or PATH"
    raise ExecutableNotFoundError(msg, executable=name)
