"""
Logger setup for applications embedding latexcompile.

The library modules only emit records through loguru; they never add or remove
sinks. Call setup_logger() from a script or CLI to route those records to a
session log file and the console.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    console_level: str = "INFO",
    extra_provenance: Optional[Dict[str, object]] = None,
) -> Optional[Path]:
    """
    Configure loguru sinks for one session.

    Replaces loguru's default handler with a colorized console sink and, when
    log_dir is given, a DEBUG-level file sink at log_dir/{context_name}.log.

    Args:
        context_name: Session identifier used for the log file name (e.g. "compile")
        log_dir: Directory for the log file; no file sink when None
        console_level: Minimum level shown on the console
        extra_provenance: Additional key-value pairs for the provenance header

    Returns:
        Path to the log file, or None when only the console is configured

    Example:
        from latexcompile.utils.logger import setup_logger

        setup_logger("compile", Path("outs/logs"), extra_provenance={"Compiler": "pdflatex"})
    """
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    log_file = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{context_name}.log"
        logger.add(log_file, format=FILE_FORMAT, level="DEBUG")

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[Dict[str, object]] = None) -> None:
    """Log script, command line, working directory and Python version (plus extras)."""
    logger.debug("=" * 80)
    logger.debug(f"Script: {sys.argv[0]}")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
