"""
Placeholder substitution for staged input files.

Input files mark substitution points as ``##key##`` where key matches
``[A-Za-z0-9_-]+``. Every token is replaced by the dictionary value for its key,
or removed entirely when the key is unknown. Substitution works directly on
bytes so that everything outside a token is copied through untouched.

Buffers that are not valid UTF-8 (images, fonts, compiled styles) are treated
as binary and returned unmodified.

Examples:
    >>> substitute(b"Dear ##name##,", {"name": "Ada"})
    b'Dear Ada,'

    >>> substitute(b"a##missing##b", {})
    b'ab'
"""

import re
from typing import Dict, List, Mapping, Optional

from latexcompile.contexts.templating.logger import _log_debug, log_substitution_result
from latexcompile.exceptions import EncodingError

PLACEHOLDER_DELIMITER = b"##"

# Non-overlapping left-to-right scan: "##a##b##" yields only "a"
PLACEHOLDER_PATTERN = re.compile(rb"##([A-Za-z0-9_-]+)##")

KEY_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def validate_dictionary(dictionary: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Check placeholder keys and values and return a private copy.

    Raises:
        ValueError: If a key contains characters outside [A-Za-z0-9_-]
        TypeError: If a value is not a string
    """
    validated = {}
    for key, value in (dictionary or {}).items():
        if not isinstance(key, str) or not KEY_PATTERN.fullmatch(key):
            raise ValueError(
                f"Invalid placeholder key {key!r}: keys may only contain ASCII letters, digits, '-' and '_'"
            )
        if not isinstance(value, str):
            raise TypeError(f"Placeholder '{key}' must map to a string, got {type(value).__name__}")
        validated[key] = value
    return validated


def is_text(content: bytes) -> bool:
    """Check whether a buffer decodes as UTF-8."""
    try:
        content.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def find_placeholders(content: bytes) -> List[str]:
    """
    List the distinct placeholder keys used in a buffer, in order of first use.

    Binary (non UTF-8) buffers never contain placeholders.
    """
    if PLACEHOLDER_DELIMITER not in content or not is_text(content):
        return []

    keys = []
    for match in PLACEHOLDER_PATTERN.finditer(content):
        key = match.group(1).decode("ascii")
        if key not in keys:
            keys.append(key)
    return keys


class PlaceholderEngine:
    """
    Compiled placeholder matcher bound to one template dictionary.

    The dictionary is copied at construction and never modified.
    """

    def __init__(self, dictionary: Optional[Mapping[str, str]] = None):
        self.dictionary = validate_dictionary(dictionary)
        self._encoded: Dict[str, bytes] = {}

    def _encode(self, key: str) -> bytes:
        if key not in self._encoded:
            try:
                self._encoded[key] = self.dictionary[key].encode("utf-8")
            except UnicodeEncodeError as e:
                raise EncodingError(key, original_error=e) from e
        return self._encoded[key]

    def substitute(self, content: bytes, name: str = "<buffer>") -> bytes:
        """
        Replace every placeholder token in content.

        Args:
            content: Raw file content
            name: Label used in log messages (usually the logical path)

        Returns:
            New buffer with tokens replaced or removed, or content itself when
            it holds no delimiter or is not valid UTF-8

        Raises:
            EncodingError: If a used replacement value cannot be encoded as UTF-8
        """
        if PLACEHOLDER_DELIMITER not in content:
            return content

        if not is_text(content):
            _log_debug(f"{name}: binary content, skipping placeholder substitution")
            return content

        replaced = 0
        deleted = 0

        def _replace(match: "re.Match[bytes]") -> bytes:
            nonlocal replaced, deleted
            key = match.group(1).decode("ascii")
            if key in self.dictionary:
                replaced += 1
                return self._encode(key)
            deleted += 1
            return b""

        result = PLACEHOLDER_PATTERN.sub(_replace, content)
        log_substitution_result(name, replaced, deleted)
        return result


def substitute(content: bytes, dictionary: Optional[Mapping[str, str]] = None) -> bytes:
    """Substitute placeholders in content using a one-off PlaceholderEngine."""
    return PlaceholderEngine(dictionary).substitute(content)
