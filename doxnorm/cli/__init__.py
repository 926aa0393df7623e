"""
doxnorm CLI package.

This package contains the command-line interface for doxnorm.
"""

from doxnorm.cli.main import app

__all__ = ["app"]
