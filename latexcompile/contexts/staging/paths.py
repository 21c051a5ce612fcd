"""Logical path normalization for staged inputs."""

import os
import re
from typing import Union

from latexcompile.exceptions import UnsafePathError

DRIVE_PATTERN = re.compile(r"^[A-Za-z]:")


def normalize_logical_path(name: Union[str, os.PathLike]) -> str:
    """
    Normalize a logical path to forward-slash relative form.

    Backslashes become forward slashes, empty and "." segments are dropped.

    Raises:
        UnsafePathError: If the path is empty, absolute, drive-qualified, contains a
            null byte or a ".." segment

    Examples:
        >>> normalize_logical_path("./assets\\\\logo.png")
        'assets/logo.png'
    """
    raw = os.fspath(name)
    text = raw.replace("\\", "/")

    if "\x00" in text:
        raise UnsafePathError(raw, "null bytes are not allowed")
    if text.startswith("/"):
        raise UnsafePathError(raw, "absolute paths are not allowed")
    if DRIVE_PATTERN.match(text):
        raise UnsafePathError(raw, "drive-qualified paths are not allowed")

    segments = [segment for segment in text.split("/") if segment not in ("", ".")]
    if ".." in segments:
        raise UnsafePathError(raw, "parent directory segments are not allowed")
    if not segments:
        raise UnsafePathError(raw, "path is empty")

    return "/".join(segments)


def is_safe_logical_path(name: Union[str, os.PathLike]) -> bool:
    """Check whether normalize_logical_path() would accept name."""
    try:
        normalize_logical_path(name)
    except UnsafePathError:
        return False
    return True
