"""
Main entry point for the doxnorm CLI application.

This module sets up the Typer application and registers its commands.
"""

from typing import Annotated

import typer
from dotenv import load_dotenv

from doxnorm import __version__
from doxnorm.cli import console as console_module
from doxnorm.cli.parse import parse

app = typer.Typer(
    help="doxnorm: Extract normalized documentation from source comments."
)


def version_callback(value: bool) -> None:
    """Prints the version of the application and exits."""
    if value:
        print(f"doxnorm v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show the application's version and exit.",
        ),
    ] = False,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable colored output", envvar="NO_COLOR"),
    ] = False,
) -> None:
    """
    Turn documentation comments into a renderer-ready model.
    """
    # Load environment variables from .env file
    load_dotenv()
    if no_color:
        console_module.console = console_module.create_console(no_color=True)
        console_module.error_console = console_module.create_console(
            no_color=True, stderr=True
        )


app.command("parse")(parse)


if __name__ == "__main__":
    app()
