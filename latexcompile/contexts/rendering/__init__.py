"""
Rendering Context

Responsibilities:
- Stages substituted inputs into an ephemeral workspace
- Invokes the LaTeX compiler twice in the workspace root
- Reads back the artifact and parses compiler diagnostics

Owns: Compiler command line, compiler configuration, compilation lifecycle
Never: Defines placeholder syntax or collects inputs from disk
"""

from latexcompile.contexts.rendering.command import CommandSpec
from latexcompile.contexts.rendering.compiler import (
    CompilationResult,
    CompilerState,
    LatexCompiler,
    artifact_name_for,
    compile_latex,
)
from latexcompile.contexts.rendering.config import (
    CompilerConfig,
    load_compiler_config,
    load_template_dictionary,
)

__all__ = [
    "CommandSpec",
    "CompilationResult",
    "CompilerConfig",
    "CompilerState",
    "LatexCompiler",
    "artifact_name_for",
    "compile_latex",
    "load_compiler_config",
    "load_template_dictionary",
]
