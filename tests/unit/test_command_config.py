"""Unit tests for CommandSpec, compiler configuration and .log parsing."""

import pytest
from omegaconf.errors import ConfigKeyError

from latexcompile.contexts.rendering.command import CommandSpec
from latexcompile.contexts.rendering.config import (
    DEFAULT_LATEX_ARGS,
    LATEX_COMPILER,
    load_compiler_config,
    load_template_dictionary,
    normalize_extension,
)
from latexcompile.contexts.rendering.latex_log import parse_latex_log


@pytest.mark.unit
class TestCommandSpec:
    """Tests for CommandSpec builder methods."""

    def test_defaults(self):
        spec = CommandSpec()
        assert spec.executable == LATEX_COMPILER
        assert spec.arguments == DEFAULT_LATEX_ARGS == ("-interaction=nonstopmode",)

    def test_builder_chain(self):
        spec = CommandSpec().with_cmd("latexmk").with_args("arg1").add_arg("arg2")
        assert (spec.executable, spec.arguments) == ("latexmk", ("arg1", "arg2"))

    def test_builder_returns_new_values(self):
        original = CommandSpec("pdflatex", ("-a",))
        changed = original.add_arg("-b")
        assert original.arguments == ("-a",)
        assert changed.arguments == ("-a", "-b")

    def test_with_args_replaces_all(self):
        spec = CommandSpec("xelatex", ("-a", "-b")).with_args("-c", "-d")
        assert spec.arguments == ("-c", "-d")

    def test_argv_appends_main_file(self):
        spec = CommandSpec("pdflatex", ("-interaction=nonstopmode",))
        assert spec.argv("main.tex") == ["pdflatex", "-interaction=nonstopmode", "main.tex"]


@pytest.mark.unit
@pytest.mark.parametrize("raw, expected", [("pdf", ".pdf"), (".pdf", ".pdf"), ("..dvi", ".dvi"), (" .ps ", ".ps")])
def test_normalize_extension(raw, expected):
    assert normalize_extension(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["", ".", "  "])
def test_normalize_extension_rejects_empty(raw):
    with pytest.raises(ValueError):
        normalize_extension(raw)


@pytest.mark.unit
class TestLoadCompilerConfig:
    """Tests for load_compiler_config()."""

    def test_defaults_without_file(self):
        config = load_compiler_config()
        assert config.executable == LATEX_COMPILER
        assert config.arguments == list(DEFAULT_LATEX_ARGS)
        assert config.dictionary == {}

    def test_file_overrides(self, tmp_path):
        config_file = tmp_path / "latex.yaml"
        config_file.write_text(
            "executable: xelatex\n"
            "arguments: ['-interaction=batchmode', '-file-line-error']\n"
            "output_extension: xdv\n"
            "dictionary:\n"
            "  title: Report\n"
            "  subtitle: ${.title} (draft)\n"
        )

        config = load_compiler_config(config_file)

        assert config.executable == "xelatex"
        assert config.arguments == ["-interaction=batchmode", "-file-line-error"]
        assert config.output_extension == ".xdv"
        assert config.dictionary == {"title": "Report", "subtitle": "Report (draft)"}

    def test_unknown_key_rejected(self, tmp_path):
        config_file = tmp_path / "latex.yaml"
        config_file.write_text("compiler: lualatex\n")
        with pytest.raises(ConfigKeyError):
            load_compiler_config(config_file)

    def test_invalid_placeholder_key_rejected(self, tmp_path):
        config_file = tmp_path / "latex.yaml"
        config_file.write_text("dictionary:\n  'bad key': x\n")
        with pytest.raises(ValueError):
            load_compiler_config(config_file)


@pytest.mark.unit
class TestLoadTemplateDictionary:
    """Tests for load_template_dictionary()."""

    def test_scalars_become_strings(self, tmp_path):
        values = tmp_path / "values.yaml"
        values.write_text("name: Ada\nyear: 1843\ndraft: true\nempty:\n")
        assert load_template_dictionary(values) == {
            "name": "Ada",
            "year": "1843",
            "draft": "True",
            "empty": "",
        }

    def test_nested_values_rejected(self, tmp_path):
        values = tmp_path / "values.yaml"
        values.write_text("author:\n  name: Ada\n")
        with pytest.raises(ValueError):
            load_template_dictionary(values)

    def test_list_document_rejected(self, tmp_path):
        values = tmp_path / "values.yaml"
        values.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_template_dictionary(values)


@pytest.mark.unit
def test_parse_latex_log():
    log = (
        "This is pdfTeX\n"
        "! Undefined control sequence.\n"
        "l.5 \\undefinedcommand\n"
        "LaTeX Warning: Reference `sec:x' on page 1 undefined on input line 3.\n"
        "Package hyperref Warning: Token not allowed in a PDF string\n"
        "Overfull \\hbox (12.3pt too wide) in paragraph at lines 4--5\n"
    )

    errors, warnings = parse_latex_log(log)

    assert errors == ["Undefined control sequence."]
    assert warnings == [
        "Reference `sec:x' on page 1 undefined on input line 3.",
        "Token not allowed in a PDF string",
        "12.3pt too wide",
    ]
