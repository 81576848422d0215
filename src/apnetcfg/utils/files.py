"""Atomic replacement of a set of generated files.

Content is written to temporary files in the destination directories and
moved over the targets with os.replace(), so readers see either the old
or the new file, never a partial one. If moving any file fails, the files
already moved are put back.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path


def _sibling_temp(path: Path, suffix: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=suffix, dir=path.parent)
    os.close(fd)
    return Path(tmp_name)


def stage(path: Path, content: str, mode: int = 0o644) -> Path:
    """Write ``content`` to a temporary sibling of ``path`` and return it."""
    tmp_path = _sibling_temp(path, ".tmp")
    try:
        tmp_path.write_text(content, encoding="utf-8")
        os.chmod(tmp_path, mode)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return tmp_path


def backup(path: Path) -> Path | None:
    """Copy an existing ``path`` to a temporary sibling; None if it is absent."""
    if not path.exists():
        return None
    backup_path = _sibling_temp(path, ".bak")
    try:
        shutil.copy2(path, backup_path)
    except BaseException:
        backup_path.unlink(missing_ok=True)
        raise
    return backup_path


def _restore(replaced: list[Path], backups: dict[Path, Path | None]) -> None:
    """Put back the previous state of every path already replaced."""
    for path in reversed(replaced):
        previous = backups.pop(path)
        if previous is None:
            path.unlink(missing_ok=True)
        else:
            os.replace(previous, path)


def write_all_atomic(
    files: dict[Path, str],
    modes: dict[Path, int] | None = None,
    default_mode: int = 0o644,
) -> None:
    """Replace several files as one set.

    Every file is staged and every existing target backed up before any
    target is touched. If staging fails no target changes; if a move
    fails the targets already moved are restored. No temporary file is
    left behind either way.
    """
    staged: list[tuple[Path, Path]] = []
    backups: dict[Path, Path | None] = {}
    try:
        for path, content in files.items():
            mode = (modes or {}).get(path, default_mode)
            staged.append((stage(path, content, mode), path))
            backups[path] = backup(path)

        replaced: list[Path] = []
        try:
            for tmp_path, path in staged:
                os.replace(tmp_path, path)
                replaced.append(path)
        except BaseException:
            _restore(replaced, backups)
            raise
    finally:
        for tmp_path, _ in staged:
            tmp_path.unlink(missing_ok=True)
        for backup_path in backups.values():
            if backup_path is not None:
                backup_path.unlink(missing_ok=True)
