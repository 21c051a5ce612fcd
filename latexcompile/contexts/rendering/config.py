"""
Compiler configuration.

Defaults come from environment variables (a .env file is honoured):

    LATEX_COMPILER          executable used for both passes (default: pdflatex)
    LATEX_OUTPUT_EXTENSION  extension of the produced artifact (default: .pdf)

YAML config files can override any field of CompilerConfig:

    executable: xelatex
    arguments: ["-interaction=nonstopmode", "-file-line-error"]
    output_extension: .pdf
    dictionary:
      title: Quarterly Report
      author: ${oc.env:USER}
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

from latexcompile.contexts.templating.placeholders import validate_dictionary

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
LATEX_OUTPUT_EXTENSION = os.getenv("LATEX_OUTPUT_EXTENSION", ".pdf")

# Keeps the compiler from stopping at an interactive prompt on errors
DEFAULT_LATEX_ARGS = ("-interaction=nonstopmode",)

# Second pass resolves references recorded in the .aux/.toc files of the first
NUM_PASSES = 2


def normalize_extension(extension: str) -> str:
    """Return extension with exactly one leading dot ("pdf" -> ".pdf")."""
    extension = extension.strip()
    if not extension.strip("."):
        raise ValueError(f"Invalid output extension: {extension!r}")
    return "." + extension.lstrip(".")


@dataclass
class CompilerConfig:
    """Settings a LatexCompiler is built from."""

    executable: str = LATEX_COMPILER
    arguments: List[str] = field(default_factory=lambda: list(DEFAULT_LATEX_ARGS))
    output_extension: str = LATEX_OUTPUT_EXTENSION
    dictionary: Dict[str, str] = field(default_factory=dict)


def load_compiler_config(config_path: Optional[Union[str, Path]] = None) -> CompilerConfig:
    """
    Load a YAML config file on top of the CompilerConfig defaults.

    Args:
        config_path: YAML file to merge; defaults only when None

    Returns:
        CompilerConfig with file values applied and interpolations resolved

    Raises:
        omegaconf.errors.OmegaConfBaseException: If the file has unknown keys or mistyped values
        ValueError: If the dictionary section has invalid placeholder keys
    """
    schema = OmegaConf.structured(CompilerConfig)
    if config_path is not None:
        schema = OmegaConf.merge(schema, OmegaConf.load(config_path))

    config = OmegaConf.to_object(schema)
    config.dictionary = validate_dictionary(config.dictionary)
    config.output_extension = normalize_extension(config.output_extension)
    return config


def load_template_dictionary(dictionary_path: Union[str, Path]) -> Dict[str, str]:
    """
    Load a flat YAML mapping of placeholder values.

    Scalar values are converted to strings; nested values are rejected.

    Raises:
        ValueError: If the file is not a flat mapping or has invalid keys
    """
    loaded = OmegaConf.load(dictionary_path)
    if not isinstance(loaded, DictConfig):
        raise ValueError(f"Template dictionary must be a mapping: {dictionary_path}")

    container = OmegaConf.to_container(loaded, resolve=True)
    dictionary = {}
    for key, value in container.items():
        if isinstance(value, (dict, list)):
            raise ValueError(f"Template value for '{key}' must be a scalar, got {type(value).__name__}")
        dictionary[str(key)] = "" if value is None else str(value)

    return validate_dictionary(dictionary)
