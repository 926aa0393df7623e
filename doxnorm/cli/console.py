"""
Console configuration for the doxnorm CLI.

This module provides the shared rich consoles: ``console`` for tables and
messages, ``error_console`` for diagnostics written to stderr.
"""

import os

from rich.console import Console


def create_console(no_color: bool = False, stderr: bool = False) -> Console:
    """Create a console for the current environment."""
    return Console(
        stderr=stderr,
        no_color=no_color or bool(os.environ.get("NO_COLOR")),
        highlight=False,
        soft_wrap=True,
        log_time_format="[%X]",
    )


console = create_console()
error_console = create_console(stderr=True)
