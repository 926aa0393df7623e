"""
Parse command for the doxnorm CLI.

This module contains the parse command, which extracts documentation entries
from a source file or a directory and prints them as JSON, YAML or a table.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError
from rich.logging import RichHandler

from doxnorm.cli import console as console_module
from doxnorm.cli.formatting import build_table, format_json, format_yaml
from doxnorm.extractor import DocumentationExtractor
from doxnorm.utils.config import DoxnormConfig
from doxnorm.utils.errors import ParsingError


class OutputFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"


def parse(
    path: Annotated[Path, typer.Argument(help="Path to a source file or directory")],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.JSON,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="YAML configuration file"),
    ] = None,
    language: Annotated[
        str | None,
        typer.Option("--language", "-l", help="Override language detection"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log progress to stderr")
    ] = False,
) -> None:
    """
    Extract documentation entries from source files.

    Examples:
        doxnorm parse src/animal.js
        doxnorm parse src --format table
        doxnorm parse lib --config doxnorm.yaml --format yaml
    """
    console = console_module.console
    error_console = console_module.error_console

    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=error_console, show_path=False)],
        )

    try:
        config = (
            DoxnormConfig.from_yaml(str(config_file)) if config_file else DoxnormConfig()
        )
        if language:
            config.parser.language = language
            config = DoxnormConfig.model_validate(config.model_dump())
    except (OSError, TypeError, ValidationError, yaml.YAMLError) as e:
        error_console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1) from None

    extractor = DocumentationExtractor(config)
    by_path = path.is_dir()

    try:
        if by_path:
            results = extractor.extract_directory(path)
            if not results:
                error_console.print(f"[red]No documentable files found in {path}[/red]")
                raise typer.Exit(1)
        else:
            results = {str(path): extractor.extract_file(path)}
    except ParsingError as e:
        error_console.print(f"[red]Error:[/red] {e.message}")
        if e.recovery_hint:
            error_console.print(f"[yellow]Hint:[/yellow] {e.recovery_hint}")
        raise typer.Exit(1) from None

    if output_format is OutputFormat.JSON:
        typer.echo(format_json(results, by_path))
    elif output_format is OutputFormat.YAML:
        typer.echo(format_yaml(results, by_path), nl=False)
    else:
        title = (
            f"Documentation in {path}"
            if len(results) == 1
            else f"Documentation in {len(results)} files from {path}"
        )
        console.print(build_table(results, title))
        total = sum(len(entries) for entries in results.values())
        console.print(f"\n[green]Found {total} entries[/green]")
