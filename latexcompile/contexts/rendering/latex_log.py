"""Diagnostics parsing for LaTeX .log files."""

import re
from pathlib import Path
from typing import List, Tuple

ERROR_PATTERN = re.compile(r"^! (.+)$", re.MULTILINE)

# Errors that can appear without the leading "!"
ADDITIONAL_ERROR_PATTERNS = [
    r"Undefined control sequence",
    r"File ended while scanning use of",
    r"Emergency stop",
]

WARNING_PATTERNS = [
    re.compile(r"LaTeX Warning: (.+)", re.MULTILINE),
    re.compile(r"Package \w+ Warning: (.+)", re.MULTILINE),
    re.compile(r"Overfull \\hbox \((.+)\)", re.MULTILINE),
    re.compile(r"Underfull \\hbox \((.+)\)", re.MULTILINE),
]


def parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """
    Parse LaTeX log content for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = [match.group(1).strip() for match in ERROR_PATTERN.finditer(log_content)]

    for pattern in ADDITIONAL_ERROR_PATTERNS:
        match = re.search(rf"({pattern}.*?)$", log_content, re.MULTILINE)
        if match and not any(match.group(1) in err for err in errors):
            errors.append(match.group(1))

    warnings = []
    for compiled in WARNING_PATTERNS:
        warnings.extend(match.group(1).strip() for match in compiled.finditer(log_content))

    return errors, warnings


def read_latex_log(log_file: Path) -> Tuple[List[str], List[str]]:
    """Parse a .log file if it exists; ([], []) otherwise."""
    if not log_file.is_file():
        return [], []
    # TeX writes font metadata that is not valid UTF-8
    return parse_latex_log(log_file.read_text(encoding="latin-1"))
