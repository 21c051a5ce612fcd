"""Custom exceptions for staging, templating and compilation failures."""

from pathlib import Path
from typing import List, Optional, Sequence, Union


class LatexCompileError(Exception):
    """Base class for every error raised by latexcompile."""


class NoInputError(LatexCompileError):
    """Raised when a compilation run is started with an empty InputSet."""

    def __init__(self, message: str = "No input files provided."):
        self.message = message
        super().__init__(message)


class LatexIOError(LatexCompileError):
    """
    Exception raised when a filesystem operation fails.

    Attributes:
        message: Error description
        path: File or directory the operation touched (if known)
        original_error: The underlying OSError
    """

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        original_error: Optional[OSError] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]
        if path is not None:
            parts.append(f"Path: {path}")
        if original_error is not None:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class UnsafePathError(LatexCompileError, ValueError):
    """Raised when a logical path would resolve outside the workspace root."""

    def __init__(self, logical_path: str, reason: str):
        self.logical_path = logical_path
        self.reason = reason
        super().__init__(f"Unsafe logical path {logical_path!r}: {reason}")


class EncodingError(LatexCompileError):
    """Raised when a placeholder replacement value cannot be encoded as UTF-8."""

    def __init__(self, key: str, original_error: Optional[Exception] = None):
        self.key = key
        self.original_error = original_error

        message = f"Replacement value for placeholder '{key}' is not valid UTF-8 text"
        if original_error is not None:
            message += f"\nOriginal error: {original_error}"
        super().__init__(message)


class CompilationError(LatexCompileError):
    """
    Exception raised when the compiler finished but produced no artifact.

    Attributes:
        message: Error description
        artifact_name: File name that was expected in the workspace root
        errors: LaTeX errors parsed from the compiler's .log file
        stdout: Combined standard output of both passes
        stderr: Combined standard error of both passes
    """

    def __init__(
        self,
        message: str,
        artifact_name: Optional[str] = None,
        errors: Optional[List[str]] = None,
        stdout: str = "",
        stderr: str = "",
    ):
        self.message = message
        self.artifact_name = artifact_name
        self.errors = errors or []
        self.stdout = stdout
        self.stderr = stderr

        parts = [message]
        if artifact_name:
            parts.append(f"Expected artifact: {artifact_name}")
        if self.errors:
            parts.append("LaTeX errors:")
            parts.extend(f"  - {err}" for err in self.errors[:5])
            if len(self.errors) > 5:
                parts.append(f"  ... and {len(self.errors) - 5} more")

        super().__init__("\n".join(parts))


class ProcessInvocationError(LatexCompileError):
    """
    Exception raised when the compiler executable cannot be started at all.

    A non-zero exit status is not an invocation error; it is tolerated.
    """

    def __init__(self, command: Sequence[str], original_error: Optional[OSError] = None):
        self.command = list(command)
        self.original_error = original_error

        parts = [f"Failed to invoke LaTeX compiler: {self.command[0] if self.command else '?'}"]
        parts.append(f"Command: {' '.join(self.command)}")
        if original_error is not None:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
