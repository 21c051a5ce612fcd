"""
Ephemeral workspace for a single compilation run.

A Workspace owns a uniquely named directory in the system temp location.
Staged inputs are written beneath it, the compiler runs inside it, and the whole
tree is removed by destroy(), on context exit, or when the object is collected.
"""

import tempfile
from pathlib import Path

from latexcompile.contexts.staging.logger import _log_debug
from latexcompile.contexts.staging.paths import normalize_logical_path
from latexcompile.exceptions import LatexIOError

WORKSPACE_PREFIX = "latexcompile-"


class Workspace:
    """Process-exclusive temporary directory with path-safe staging."""

    def __init__(self, tmpdir: tempfile.TemporaryDirectory):
        self._tmpdir = tmpdir
        self.root = Path(tmpdir.name)
        self.destroyed = False

    @classmethod
    def create(cls, prefix: str = WORKSPACE_PREFIX) -> "Workspace":
        """
        Allocate a new workspace directory.

        Raises:
            LatexIOError: If the temp location is not writable
        """
        try:
            tmpdir = tempfile.TemporaryDirectory(prefix=prefix)
        except OSError as e:
            raise LatexIOError(
                "Failed to create temporary workspace", path=tempfile.gettempdir(), original_error=e
            ) from e

        workspace = cls(tmpdir)
        _log_debug(f"Created workspace {workspace.root}")
        return workspace

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()

    def __repr__(self) -> str:
        state = "destroyed" if self.destroyed else "active"
        return f"Workspace({str(self.root)!r}, {state})"

    @property
    def exists(self) -> bool:
        return self.root.is_dir()

    def path(self, relative: str) -> Path:
        """
        Resolve a logical path against the root without touching the filesystem.

        Raises:
            UnsafePathError: If relative would escape the root
        """
        return self.root.joinpath(*normalize_logical_path(relative).split("/"))

    def stage(self, name: str, content: bytes) -> Path:
        """
        Write content at root/name, creating parent directories as needed.

        Existing files are overwritten.

        Raises:
            UnsafePathError: If name would escape the root
            LatexIOError: If a directory or the file cannot be written
        """
        if self.destroyed:
            raise RuntimeError(f"Cannot stage into destroyed workspace {self.root}")

        target = self.path(name)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            raise LatexIOError("Failed to stage input file", path=target, original_error=e) from e

        _log_debug(f"Staged {name} ({len(content)} bytes)")
        return target

    def destroy(self) -> None:
        """Remove the workspace tree. Safe to call more than once."""
        if self.destroyed:
            return
        self._tmpdir.cleanup()
        self.destroyed = True
        _log_debug(f"Removed workspace {self.root}")
