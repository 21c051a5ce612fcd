"""
Shared utilities for latexcompile.

- Logger setup for embedding applications
- PDF inspection helpers
"""

from latexcompile.utils.logger import setup_logger
from latexcompile.utils.pdf_processing import is_pdf, page_count

__all__ = ["is_pdf", "page_count", "setup_logger"]
