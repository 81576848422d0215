"""Reader for the marker and value files describing the wanted networks."""

from __future__ import annotations

from pathlib import Path


class StateStore:
    """A directory of small state files.

    Markers are files whose existence is the value (e.g. 'enabled').
    Value files hold a single stripped string (e.g. 'password').
    """

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)

    def has(self, name: str) -> bool:
        """Check whether the marker file exists."""
        return self._path(name).exists()

    def read(self, name: str) -> str | None:
        """Read a value file, stripped.

        Returns None if the file is missing or cannot be read; callers
        decide the fallback.
        """
        try:
            return self._path(name).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            return None

    def scoped(self, sub: str) -> StateStore:
        """Return a store for a sub-directory ('.' is this directory)."""
        if sub in ("", "."):
            return self
        return StateStore(self.base_dir / sub)

    def _path(self, name: str) -> Path:
        return self.base_dir / name.lower()

    def __repr__(self) -> str:
        return f"StateStore({str(self.base_dir)!r})"
