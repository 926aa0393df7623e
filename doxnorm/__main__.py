"""
Allow doxnorm to be invoked as a module.

This enables running the CLI with:
    python -m doxnorm
"""

from doxnorm.cli.main import app

if __name__ == "__main__":
    app()
