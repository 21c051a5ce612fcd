"""
Integration tests for rendering context - tests real LaTeX compilation.
"""

import shutil

import pytest

from latexcompile.contexts.rendering.compiler import LatexCompiler
from latexcompile.contexts.staging.inputs import InputSet
from latexcompile.exceptions import CompilationError

PDFLATEX_AVAILABLE = shutil.which("pdflatex") is not None
skip_if_no_pdflatex = pytest.mark.skipif(
    not PDFLATEX_AVAILABLE,
    reason="pdflatex not installed - install TeX Live, MiKTeX, or MacTeX"
)


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_pdflatex
def test_compile_minimal_document():
    """End-to-end: substituted document compiles to a PDF and the workspace is removed."""
    inputs = InputSet()
    inputs.add(
        "test.tex",
        b"\\documentclass{article}\n\\begin{document}##test##\\end{document}\n",
    )

    compiler = LatexCompiler({"test": "Minimal"})
    root = compiler.workspace.root
    with compiler:
        result = compiler.compile("test.tex", inputs)

    assert result.artifact.startswith(b"%PDF-")
    assert result.page_count == 1
    assert not root.exists()


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_pdflatex
def test_compile_folder_with_nested_main(assets_dir):
    """Compile a main file that lives in a subdirectory of the staged tree."""
    inputs = InputSet.from_paths(assets_dir)

    with LatexCompiler() as compiler:
        pdf = compiler.run("assets/nested/main.tex", inputs)

    assert pdf.startswith(b"%PDF-")


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_pdflatex
def test_cross_references_resolved_by_second_pass():
    """Test multi-pass compilation for cross-references."""
    inputs = InputSet()
    inputs.add(
        "refs.tex",
        rb"""
\documentclass{article}
\begin{document}
See section \ref{sec:test}.
\section{Test Section}
\label{sec:test}
This is a test.
\end{document}
""",
    )

    with LatexCompiler() as compiler:
        result = compiler.compile("refs.tex", inputs)

    assert not any("undefined" in warning for warning in result.warnings)


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_pdflatex
def test_fatal_error_reported():
    """A document that cannot produce any page yields a CompilationError with parsed errors."""
    inputs = InputSet()
    inputs.add("broken.tex", rb"\documentclass{article}\begin{document}\undefinedcommand")

    with LatexCompiler() as compiler:
        with pytest.raises(CompilationError) as excinfo:
            compiler.run("broken.tex", inputs)

    assert excinfo.value.errors
