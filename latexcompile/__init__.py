"""
latexcompile - clean, isolated LaTeX builds with ##placeholder## templating

Callers hand over a set of named byte buffers and a dictionary of placeholder
values and get back the compiled document bytes. Every build runs in its own
temporary directory, which is removed afterwards.

Architecture:
- Templating Context: ##key## placeholder substitution on raw bytes
- Staging Context: input collection, logical paths, ephemeral workspace
- Rendering Context: two-pass compiler invocation and artifact read-back
"""

from latexcompile.contexts.rendering import (
    CommandSpec,
    CompilationResult,
    CompilerConfig,
    LatexCompiler,
    compile_latex,
    load_compiler_config,
    load_template_dictionary,
)
from latexcompile.contexts.staging import InputFile, InputSet, Workspace
from latexcompile.contexts.templating import PlaceholderEngine, find_placeholders, substitute
from latexcompile.exceptions import (
    CompilationError,
    EncodingError,
    LatexCompileError,
    LatexIOError,
    NoInputError,
    ProcessInvocationError,
    UnsafePathError,
)

__version__ = "0.1.0"

__all__ = [
    "CommandSpec",
    "CompilationError",
    "CompilationResult",
    "CompilerConfig",
    "EncodingError",
    "InputFile",
    "InputSet",
    "LatexCompileError",
    "LatexCompiler",
    "LatexIOError",
    "NoInputError",
    "PlaceholderEngine",
    "ProcessInvocationError",
    "UnsafePathError",
    "Workspace",
    "compile_latex",
    "find_placeholders",
    "load_compiler_config",
    "load_template_dictionary",
    "substitute",
]
