"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def log_substitution_result(name: str, replaced: int, deleted: int) -> None:
    """Log how many placeholders were filled or dropped in one buffer."""
    if replaced or deleted:
        _log_debug(f"{name}: {replaced} placeholders replaced, {deleted} unknown removed")
    if deleted:
        _log_warning(f"{name}: {deleted} placeholders had no value and were removed")
