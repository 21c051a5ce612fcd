"""
Input collection for a compilation run.

An InputSet is an ordered list of InputFile records (logical path + bytes).
Logical paths are unique within a set: adding a path that is already present
replaces the earlier content in place (last write wins, first position kept).

Examples:
    inputs = InputSet()
    inputs.add("main.tex", b"\\\\input{body}")
    inputs.add_folder(Path("assets"))        # assets/logo.png, assets/nested/main.tex, ...

    inputs = InputSet.from_paths("main.tex", "assets")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Union

from latexcompile.contexts.staging.logger import _log_debug
from latexcompile.contexts.staging.paths import is_safe_logical_path, normalize_logical_path
from latexcompile.exceptions import LatexIOError, UnsafePathError

PathArg = Union[str, os.PathLike]


@dataclass(frozen=True)
class InputFile:
    """One staged input: forward-slash relative logical path and raw content."""

    name: str
    content: bytes


@dataclass
class InputSet:
    """Ordered, name-unique collection of input files."""

    entries: List[InputFile] = field(default_factory=list)

    def __post_init__(self):
        # Route constructor records through add() so names stay normalized and unique
        records, self.entries = self.entries, []
        for record in records:
            self.add(record.name, record.content)

    @classmethod
    def from_paths(cls, *paths: PathArg) -> "InputSet":
        """Collect every given file or directory into a new InputSet."""
        inputs = cls()
        for path in paths:
            inputs.add_path(path)
        return inputs

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[InputFile]:
        return iter(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    @property
    def names(self) -> List[str]:
        return [entry.name for entry in self.entries]

    def get(self, name: str) -> Optional[bytes]:
        """Return the content staged under name, or None."""
        name = normalize_logical_path(name)
        for entry in self.entries:
            if entry.name == name:
                return entry.content
        return None

    def add(self, name: str, content: bytes) -> None:
        """
        Add a single named buffer.

        Raises:
            UnsafePathError: If name is absolute or contains ".." segments
        """
        record = InputFile(normalize_logical_path(name), bytes(content))

        for index, entry in enumerate(self.entries):
            if entry.name == record.name:
                _log_debug(f"Replacing earlier input: {record.name}")
                self.entries[index] = record
                return

        self.entries.append(record)

    def add_file(self, file: PathArg, name: Optional[str] = None) -> None:
        """
        Read a single file into the set.

        The logical path defaults to the path as given when it is a safe
        relative path, otherwise to the file's base name. Paths that are not
        regular files contribute nothing.

        Raises:
            LatexIOError: If an existing file cannot be read
        """
        path = Path(file)
        if not path.is_file():
            _log_debug(f"Skipping non-file input: {path}")
            return

        if name is None:
            name = os.fspath(file) if is_safe_logical_path(file) else path.name

        self.add(name, _read_bytes(path))

    def add_folder(self, folder: PathArg) -> None:
        """
        Recursively read every file under folder.

        Logical paths are relative to the folder's parent, so they start with
        the folder's own name (e.g. "assets/nested/main.tex"). Entries are
        visited in directory-listing order. Symlinked subdirectories are not
        followed.

        Raises:
            LatexIOError: If an existing directory cannot be listed or a file
                inside it cannot be read
            UnsafePathError: If folder is the filesystem root
        """
        root = Path(folder)
        if not root.is_dir():
            _log_debug(f"Skipping non-directory input: {root}")
            return

        # "." and ".." have no usable name of their own
        root_name = root.name if root.name not in ("", "..") else root.resolve().name
        if not root_name:
            raise UnsafePathError(os.fspath(folder), "cannot collect the filesystem root")
        self._add_tree(root, root_name)

    def add_path(self, path: PathArg) -> None:
        """Add a file or a directory tree; anything else contributes nothing."""
        candidate = Path(path)
        if candidate.is_dir():
            self.add_folder(candidate)
        elif candidate.is_file():
            self.add_file(path)
        else:
            _log_debug(f"Skipping missing or special path: {candidate}")

    def _add_tree(self, directory: Path, prefix: str) -> None:
        try:
            children = list(directory.iterdir())
        except OSError as e:
            raise LatexIOError("Failed to list input directory", path=directory, original_error=e) from e

        for child in children:
            logical = f"{prefix}/{child.name}"
            if child.is_dir():
                if child.is_symlink():
                    _log_debug(f"Not following symlinked directory: {child}")
                    continue
                self._add_tree(child, logical)
            elif child.is_file():
                self.add(logical, _read_bytes(child))
            else:
                _log_debug(f"Skipping special file: {child}")


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise LatexIOError("Failed to read input file", path=path, original_error=e) from e
