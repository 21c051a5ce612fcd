#!/usr/bin/env python3
"""
LaTeX Compilation CLI

Compiles LaTeX sources in a clean temporary directory with ##placeholder## substitution.

Commands:
    compile      - Compile a main .tex file from one or more input files/folders
    placeholders - List the placeholder keys used by input files

Examples:\n

    compile_pdf.py compile main.tex main.tex assets                 # Compile with an assets folder

    compile_pdf.py compile main.tex main.tex --set title=Report     # Fill ##title##

    compile_pdf.py compile main.tex main.tex --dict values.yaml     # Values from YAML

    compile_pdf.py compile main.tex main.tex --cmd xelatex -o out.pdf

    compile_pdf.py placeholders assets                              # Show keys in use
"""

from pathlib import Path
from typing import Dict, List, Optional

import typer
from omegaconf.errors import OmegaConfBaseException
from typing_extensions import Annotated

from latexcompile import (
    CommandSpec,
    InputSet,
    LatexCompileError,
    LatexCompiler,
    find_placeholders,
)
from latexcompile.contexts.rendering.config import load_compiler_config, load_template_dictionary
from latexcompile.utils.logger import setup_logger

app = typer.Typer(
    help="Compile LaTeX documents in an isolated workspace with placeholder substitution",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def parse_assignments(assignments: List[str]) -> Dict[str, str]:
    """Parse KEY=VALUE pairs from --set options."""
    values = {}
    for pair in assignments:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got: {pair}", param_hint="--set")
        values[key] = value
    return values


@app.command("compile")
def compile_command(
    main_file: Annotated[
        str,
        typer.Argument(help="Logical path of the main .tex file (e.g. 'assets/main.tex')"),
    ],
    inputs: Annotated[
        List[Path],
        typer.Argument(help="Input files or folders to stage into the workspace"),
    ],
    assignments: Annotated[
        Optional[List[str]],
        typer.Option("--set", "-s", help="Placeholder value as KEY=VALUE (repeatable)"),
    ] = None,
    dict_file: Annotated[
        Optional[Path],
        typer.Option("--dict", "-d", help="YAML file with placeholder values", exists=True, dir_okay=False),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML compiler config", exists=True, dir_okay=False),
    ] = None,
    cmd: Annotated[
        Optional[str],
        typer.Option("--cmd", help="Compiler executable (default: $LATEX_COMPILER or pdflatex)"),
    ] = None,
    args: Annotated[
        Optional[List[str]],
        typer.Option("--arg", "-a", help="Compiler argument, replaces the defaults (repeatable)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Where to write the artifact (default: <stem>.pdf in cwd)"),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Write a detailed compile.log into this directory"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug output including compiler stdout/stderr"),
    ] = False,
):
    """
    Compile MAIN_FILE from the given inputs.

    Placeholder values are merged in order: config file, --dict file, --set options.

    Examples:\n

        $ compile_pdf.py compile assets/main.tex assets --set test=Minimal

        $ compile_pdf.py compile card.tex card.tex logo.png --arg -interaction=batchmode
    """
    try:
        config = load_compiler_config(config_file)
    except (OmegaConfBaseException, ValueError) as e:
        typer.secho(f"\n✗ Invalid config {config_file}: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    setup_logger(
        "compile",
        log_dir,
        console_level="DEBUG" if verbose else "INFO",
        extra_provenance={"LaTeX compiler": cmd or config.executable},
    )

    dictionary = dict(config.dictionary)
    try:
        if dict_file is not None:
            dictionary.update(load_template_dictionary(dict_file))
        dictionary.update(parse_assignments(assignments or []))

        input_set = InputSet.from_paths(*inputs)

        command = CommandSpec(config.executable, tuple(config.arguments))
        if cmd:
            command = command.with_cmd(cmd)
        if args:
            command = command.with_args(*args)

        with LatexCompiler(
            dictionary, command=command, output_extension=config.output_extension, verbose=verbose
        ) as compiler:
            result = compiler.compile(main_file, input_set)
    except (LatexCompileError, ValueError) as e:
        typer.secho(f"\n✗ {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output = output or Path.cwd() / result.artifact_name
    output.write_bytes(result.artifact)

    typer.secho("\n✓ Compilation succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Output: {output}")
    if result.page_count is not None:
        typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  Warnings: {len(result.warnings)}")
    typer.echo("")


@app.command("placeholders")
def placeholders_command(
    inputs: Annotated[
        List[Path],
        typer.Argument(help="Input files or folders to scan"),
    ],
):
    """
    List the ##key## placeholders used by each text input.

    Examples:\n

        $ compile_pdf.py placeholders assets
    """
    try:
        input_set = InputSet.from_paths(*inputs)
    except LatexCompileError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    found = False
    for entry in input_set:
        keys = find_placeholders(entry.content)
        if keys:
            found = True
            typer.secho(entry.name, fg=typer.colors.BLUE, bold=True)
            for key in keys:
                typer.echo(f"  ##{key}##")

    if not found:
        typer.echo("No placeholders found.")


if __name__ == "__main__":
    app()
