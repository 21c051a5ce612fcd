"""Compiler command line specification."""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Tuple

from latexcompile.contexts.rendering.config import DEFAULT_LATEX_ARGS, LATEX_COMPILER


@dataclass(frozen=True)
class CommandSpec:
    """
    Executable name and arguments used for every compiler pass.

    The builder methods return new values; a CommandSpec is never mutated.

    Example:
        >>> CommandSpec().with_cmd("latexmk").with_args("-pdf").add_arg("-quiet")
        CommandSpec(executable='latexmk', arguments=('-pdf', '-quiet'))
    """

    executable: str = LATEX_COMPILER
    arguments: Tuple[str, ...] = DEFAULT_LATEX_ARGS

    def with_cmd(self, executable: str) -> "CommandSpec":
        """Replace the executable (default: pdflatex)."""
        return replace(self, executable=executable)

    def with_args(self, *arguments: str) -> "CommandSpec":
        """Replace the argument list. Use add_arg() to append further arguments."""
        return replace(self, arguments=tuple(arguments))

    def add_arg(self, argument: str) -> "CommandSpec":
        """Append one argument."""
        return replace(self, arguments=self.arguments + (argument,))

    def argv(self, main_file: str) -> List[str]:
        """Full command line for compiling main_file."""
        return [self.executable, *self.arguments, main_file]

    @property
    def display_name(self) -> str:
        return Path(self.executable).name
