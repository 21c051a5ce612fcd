"""
Templating Context

Responsibilities:
- Locates ##key## placeholders in input buffers
- Replaces them with template dictionary values (unknown keys are removed)
- Leaves binary buffers untouched

Owns: Placeholder syntax, template dictionary validation
Never: Touches the filesystem or invokes the compiler
"""

from latexcompile.contexts.templating.placeholders import (
    PLACEHOLDER_PATTERN,
    PlaceholderEngine,
    find_placeholders,
    substitute,
    validate_dictionary,
)

__all__ = [
    "PLACEHOLDER_PATTERN",
    "PlaceholderEngine",
    "find_placeholders",
    "substitute",
    "validate_dictionary",
]
