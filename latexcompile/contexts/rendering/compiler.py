"""
LaTeX Compilation Module

Builds a document inside a clean temporary workspace:

1. every input is run through placeholder substitution and staged into the
   workspace at its logical path,
2. the compiler is invoked twice in the workspace root (the second pass
   resolves references recorded by the first),
3. the artifact <main stem><extension> is read back and returned as bytes.

A LatexCompiler owns its workspace and compiles exactly once. The workspace is
removed by close(), on context exit, or when the compiler is garbage collected.

Example:
    inputs = InputSet.from_paths("assets")
    with LatexCompiler({"title": "Minimal"}) as compiler:
        pdf = compiler.run("assets/main.tex", inputs)
    Path("out.pdf").write_bytes(pdf)
"""

import subprocess
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import List, Mapping, Optional, Tuple

from latexcompile.contexts.rendering.command import CommandSpec
from latexcompile.contexts.rendering.config import (
    LATEX_OUTPUT_EXTENSION,
    NUM_PASSES,
    CompilerConfig,
    normalize_extension,
)
from latexcompile.contexts.rendering.latex_log import read_latex_log
from latexcompile.contexts.rendering.logger import (
    _log_debug,
    _log_warning,
    log_compilation_failure,
    log_compilation_result,
    log_compilation_start,
    log_pass_result,
)
from latexcompile.contexts.staging.inputs import InputSet
from latexcompile.contexts.staging.paths import normalize_logical_path
from latexcompile.contexts.staging.workspace import Workspace
from latexcompile.contexts.templating.placeholders import PlaceholderEngine
from latexcompile.exceptions import (
    CompilationError,
    LatexIOError,
    NoInputError,
    ProcessInvocationError,
)
from latexcompile.utils.pdf_processing import page_count


class CompilerState(Enum):
    CONFIGURED = "configured"
    STAGED = "staged"
    COMPILED = "compiled"
    FAILED = "failed"
    CLOSED = "closed"


@dataclass
class PassResult:
    """Output of a single compiler invocation."""

    returncode: int
    stdout: str = ""
    stderr: str = ""


@dataclass
class CompilationResult:
    """
    Result of a successful compilation.

    Attributes:
        artifact: Raw bytes of the produced file
        artifact_name: File name of the artifact in the workspace root
        stdout: Standard output of both passes
        stderr: Standard error of both passes
        return_codes: Exit status of each pass
        errors: LaTeX errors parsed from the .log file
        warnings: LaTeX warnings parsed from the .log file
        page_count: Number of pages when the artifact is a readable PDF
    """

    artifact: bytes
    artifact_name: str
    stdout: str = ""
    stderr: str = ""
    return_codes: List[int] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    page_count: Optional[int] = None


def artifact_name_for(main_file: str, output_extension: str = LATEX_OUTPUT_EXTENSION) -> str:
    """
    Name of the file the compiler writes for main_file.

    >>> artifact_name_for("chapters/report.tex")
    'report.pdf'
    """
    stem = PurePosixPath(normalize_logical_path(main_file)).stem
    return stem + normalize_extension(output_extension)


class LatexCompiler:
    """
    Wrapper around a LaTeX compiler that builds in a clean temporary directory.

    Args:
        dictionary: Placeholder values applied to every text input
        command: Executable and arguments (default: pdflatex -interaction=nonstopmode)
        output_extension: Extension of the artifact to read back (default: .pdf)
        verbose: Log full compiler output on success as well as on failure

    Raises:
        ValueError: If the dictionary has invalid placeholder keys
        LatexIOError: If the temporary workspace cannot be created
    """

    def __init__(
        self,
        dictionary: Optional[Mapping[str, str]] = None,
        command: Optional[CommandSpec] = None,
        output_extension: str = LATEX_OUTPUT_EXTENSION,
        verbose: bool = False,
    ):
        self.engine = PlaceholderEngine(dictionary)
        self.command = command if command is not None else CommandSpec()
        self.output_extension = normalize_extension(output_extension)
        self.verbose = verbose
        self.workspace = Workspace.create()
        self.state = CompilerState.CONFIGURED
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: CompilerConfig, verbose: bool = False) -> "LatexCompiler":
        """Build a compiler from a loaded CompilerConfig."""
        return cls(
            dictionary=config.dictionary,
            command=CommandSpec(config.executable, tuple(config.arguments)),
            output_extension=config.output_extension,
            verbose=verbose,
        )

    def __enter__(self) -> "LatexCompiler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def dictionary(self) -> Mapping[str, str]:
        return self.engine.dictionary

    @property
    def closed(self) -> bool:
        return self.state is CompilerState.CLOSED

    # Configuration: each call returns a new compiler and closes this one

    def with_cmd(self, executable: str) -> "LatexCompiler":
        """Overwrite the default executable (pdflatex)."""
        return self._reconfigure(command=self.command.with_cmd(executable))

    def with_args(self, *arguments: str) -> "LatexCompiler":
        """Replace the argument list. Use add_arg() to append further arguments."""
        return self._reconfigure(command=self.command.with_args(*arguments))

    def add_arg(self, argument: str) -> "LatexCompiler":
        """Append an argument to the command line."""
        return self._reconfigure(command=self.command.add_arg(argument))

    def with_output_extension(self, output_extension: str) -> "LatexCompiler":
        """Change the extension of the artifact read back after compilation."""
        return self._reconfigure(output_extension=output_extension)

    def _reconfigure(self, **changes) -> "LatexCompiler":
        if self.state is not CompilerState.CONFIGURED:
            raise RuntimeError(f"Cannot reconfigure compiler in state '{self.state.value}'")

        settings = {
            "dictionary": self.dictionary,
            "command": self.command,
            "output_extension": self.output_extension,
            "verbose": self.verbose,
        }
        settings.update(changes)

        replacement = LatexCompiler(**settings)
        self.close()
        return replacement

    # Compilation

    def run(self, main_file: str, inputs: InputSet) -> bytes:
        """
        Compile inputs and return the artifact bytes.

        Args:
            main_file: Logical path of the main .tex file within inputs
            inputs: Files to stage into the workspace

        Raises:
            NoInputError: If inputs is empty (nothing is staged or invoked)
            UnsafePathError: If main_file or an input path escapes the workspace
            LatexIOError: If staging or reading the artifact fails
            EncodingError: If a used placeholder value is not encodable
            ProcessInvocationError: If the compiler cannot be started
            CompilationError: If both passes finished without an artifact
            RuntimeError: If this compiler has already run or was closed
        """
        return self.compile(main_file, inputs).artifact

    def compile(self, main_file: str, inputs: InputSet) -> CompilationResult:
        """Like run(), but returns the artifact with compiler diagnostics."""
        self._claim(inputs)
        try:
            result = self._compile(main_file, inputs)
        except Exception:
            self.state = CompilerState.FAILED
            raise
        self.state = CompilerState.COMPILED
        return result

    def close(self) -> None:
        """Remove the workspace. Safe to call more than once."""
        if self.state is CompilerState.CLOSED:
            return
        self.workspace.destroy()
        self.state = CompilerState.CLOSED

    def _claim(self, inputs: InputSet) -> None:
        with self._lock:
            if self.state is not CompilerState.CONFIGURED:
                raise RuntimeError(
                    f"LatexCompiler can only run once; current state is '{self.state.value}'. "
                    "Create a new compiler for every build."
                )
            if not inputs:
                raise NoInputError()
            self.state = CompilerState.STAGED

    def _compile(self, main_file: str, inputs: InputSet) -> CompilationResult:
        main = normalize_logical_path(main_file)
        argv = self.command.argv(main)
        artifact_name = artifact_name_for(main, self.output_extension)

        log_compilation_start(main, len(inputs), argv, self.workspace.root)
        start_time = time.time()

        self._stage(inputs)
        if main not in inputs.names:
            _log_warning(f"Main file {main} is not among the staged inputs")

        passes = [self._invoke(argv, number) for number in range(1, NUM_PASSES + 1)]
        stdout = "\n".join(p.stdout for p in passes)
        stderr = "\n".join(p.stderr for p in passes)

        errors, warnings = self._read_diagnostics(artifact_name)
        artifact_path = self.workspace.path(artifact_name)
        elapsed_time = time.time() - start_time

        if not artifact_path.is_file():
            error = CompilationError(
                f"Compiler produced no output for {main}",
                artifact_name=artifact_name,
                errors=errors,
                stdout=stdout,
                stderr=stderr,
            )
            log_compilation_failure(main, error, elapsed_time)
            raise error

        try:
            artifact = artifact_path.read_bytes()
        except OSError as e:
            raise LatexIOError("Failed to read compiled artifact", path=artifact_path, original_error=e) from e

        result = CompilationResult(
            artifact=artifact,
            artifact_name=artifact_name,
            stdout=stdout,
            stderr=stderr,
            return_codes=[p.returncode for p in passes],
            errors=errors,
            warnings=warnings,
            page_count=page_count(artifact) if self.output_extension == ".pdf" else None,
        )
        log_compilation_result(main, result, elapsed_time, verbose=self.verbose)
        return result

    def _stage(self, inputs: InputSet) -> None:
        for entry in inputs:
            content = self.engine.substitute(entry.content, name=entry.name)
            self.workspace.stage(entry.name, content)
        _log_debug(f"Staged {len(inputs)} inputs into {self.workspace.root}")

    def _invoke(self, argv: List[str], pass_number: int) -> PassResult:
        start_time = time.time()
        try:
            completed = subprocess.run(
                argv,
                cwd=self.workspace.root,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",  # compiler output may contain non-UTF-8 bytes
            )
        except OSError as e:
            raise ProcessInvocationError(argv, original_error=e) from e

        log_pass_result(pass_number, completed.returncode, time.time() - start_time)
        return PassResult(completed.returncode, completed.stdout or "", completed.stderr or "")

    def _read_diagnostics(self, artifact_name: str) -> Tuple[List[str], List[str]]:
        log_file = self.workspace.path(str(PurePosixPath(artifact_name).with_suffix(".log")))
        try:
            return read_latex_log(log_file)
        except OSError as e:
            raise LatexIOError("Failed to read compiler log", path=log_file, original_error=e) from e


def compile_latex(
    main_file: str,
    inputs: InputSet,
    dictionary: Optional[Mapping[str, str]] = None,
    command: Optional[CommandSpec] = None,
    output_extension: str = LATEX_OUTPUT_EXTENSION,
) -> bytes:
    """Compile inputs with a one-off LatexCompiler and return the artifact bytes."""
    with LatexCompiler(dictionary, command=command, output_extension=output_extension) as compiler:
        return compiler.run(main_file, inputs)
