"""
Staging Context

Responsibilities:
- Collects input files and directory trees into an InputSet
- Normalizes logical paths and rejects ones that escape the workspace
- Owns the ephemeral workspace directory and its cleanup

Owns: InputSet, Workspace, logical path rules
Never: Substitutes placeholders or invokes the compiler
"""

from latexcompile.contexts.staging.inputs import InputFile, InputSet
from latexcompile.contexts.staging.paths import is_safe_logical_path, normalize_logical_path
from latexcompile.contexts.staging.workspace import Workspace

__all__ = [
    "InputFile",
    "InputSet",
    "Workspace",
    "is_safe_logical_path",
    "normalize_logical_path",
]
