"""
Staging context logger.

Provides logging interface for staging context with automatic [stage] prefix.
All staging modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[stage]"


def _log_debug(message: str) -> None:
    """Log debug message with [stage] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
