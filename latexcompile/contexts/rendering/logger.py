"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from pathlib import Path
from typing import List

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_compilation_start(main_file: str, num_inputs: int, argv: List[str], workspace: Path) -> None:
    """Log start of compilation with context."""
    _log_info(f"Starting compilation: {main_file} ({num_inputs} inputs)")
    _log_debug(f"  Workspace: {workspace}")
    _log_debug(f"  Command: {' '.join(argv)}")


def log_pass_result(pass_number: int, returncode: int, elapsed_time: float) -> None:
    """Log the outcome of one compiler pass. Non-zero exits are tolerated."""
    if returncode == 0:
        _log_debug(f"Pass {pass_number} finished ({elapsed_time:.2f}s)")
    else:
        _log_warning(f"Pass {pass_number} exited with status {returncode} ({elapsed_time:.2f}s)")


def log_compilation_result(
    main_file: str,
    result,  # CompilationResult
    elapsed_time: float,
    verbose: bool = False,
) -> None:
    """
    Log a successful compilation with diagnostics.

    Args:
        main_file: Main entry that was compiled
        result: CompilationResult from LatexCompiler.compile()
        elapsed_time: Time taken for both passes
        verbose: Show detailed warnings and full compiler output
    """
    pages = f", {result.page_count} pages" if result.page_count is not None else ""
    _log_success(
        f"{main_file} -> {result.artifact_name}: {len(result.artifact)} bytes{pages} ({elapsed_time:.2f}s)"
    )

    if result.warnings:
        _log_warning(f"{len(result.warnings)} warnings detected")
        warning_limit = 10 if verbose else 3
        for i, warn in enumerate(result.warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warn}")
        if len(result.warnings) > warning_limit:
            _log_debug(f"  ... and {len(result.warnings) - warning_limit} more warnings")

    if verbose:
        _log_raw_output(result.stdout, result.stderr)


def log_compilation_failure(main_file: str, error, elapsed_time: float) -> None:
    """Log a run that produced no artifact, including the full compiler output."""
    _log_error(f"Compilation failed: {main_file} ({elapsed_time:.2f}s)")
    for i, err in enumerate(error.errors[:5], 1):
        _log_error(f"  Error {i}: {err}")
    if len(error.errors) > 5:
        _log_error(f"  ... and {len(error.errors) - 5} more errors")

    _log_raw_output(error.stdout, error.stderr)


def _log_raw_output(stdout: str, stderr: str) -> None:
    # raw=True keeps loguru from prefixing every line of multi-line output
    if stdout:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nCOMPILER STDOUT:\n{'=' * 80}\n{stdout}\n")
    if stderr:
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nCOMPILER STDERR:\n{'=' * 80}\n{stderr}\n")
