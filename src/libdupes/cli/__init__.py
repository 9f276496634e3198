"""
libdupes CLI module.

This module provides the command-line interface for libdupes.
"""

from libdupes.cli.main import cli, main

__all__ = ["cli", "main"]
