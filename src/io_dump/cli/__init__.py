"""Command-line interface for io-dump.

Provides commands for inspecting recorded event logs and validating
configuration files.
"""

from .main import cli, main

__all__ = ["cli", "main"]
